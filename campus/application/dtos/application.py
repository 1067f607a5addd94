"""DTOs for the application intake workflow."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from campus.domain.enums import ApplicationStatus, DocumentType, SponsorshipType


class ReviewAction(str, Enum):
    """Admissions review decision."""

    ACCEPT = "accept"
    REJECT = "reject"


@dataclass(frozen=True)
class ApplicationResult:
    """Application read-model."""

    id: str
    email: str
    first_name: str
    last_name: str
    program_id: str
    session_id: str
    status: ApplicationStatus
    sponsorship_type: SponsorshipType | None
    middle_name: str | None = None
    phone: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    state_of_origin: str | None = None
    lga_of_origin: str | None = None
    nin: str | None = None
    religion: str | None = None
    address: str | None = None
    guardian_first_name: str | None = None
    guardian_last_name: str | None = None
    guardian_phone: str | None = None
    guardian_status: str | None = None
    rejection_reason: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    converted_student_id: str | None = None

    @property
    def is_sponsored(self) -> bool:
        return self.sponsorship_type is not None


@dataclass(frozen=True)
class DocumentRef:
    """Stored document reference (application or student)."""

    id: str
    doc_type: DocumentType
    bucket: str
    path: str
    original_name: str | None = None
    mime_type: str | None = None


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of converting an accepted application into a student."""

    application_id: str
    student_id: str
    profile_id: str
    matric_no: str
    warnings: tuple[str, ...] = ()
