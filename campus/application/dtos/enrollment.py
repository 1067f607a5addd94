"""DTOs for offerings, eligibility and enrollments."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from campus.domain.enums import RegistrationStatus


@dataclass(frozen=True)
class OfferingResult:
    """Course offering read-model used by the eligibility gate."""

    id: str
    course_code: str
    session_id: str
    semester: str
    program_id: str | None
    level: str | None
    is_published: bool
    title: str | None = None


@dataclass(frozen=True)
class StudentRecordResult:
    """Student RoleRecord read-model."""

    id: str
    profile_id: str
    matric_no: str
    program_id: str
    status: str
    level: str | None = None


@dataclass(frozen=True)
class RegistrationResult:
    id: str
    student_id: str
    session_id: str
    status: RegistrationStatus
    level: str | None = None


class EligibilityOutcome(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"
    ALREADY_ENROLLED = "already_enrolled"


@dataclass(frozen=True)
class EligibilityDecision:
    """Result of EligibilityGate.can_enroll. reason is set only when denied."""

    outcome: EligibilityOutcome
    reason: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is not EligibilityOutcome.DENIED

    @classmethod
    def allow(cls) -> "EligibilityDecision":
        return cls(EligibilityOutcome.ALLOWED)

    @classmethod
    def deny(cls, reason: str) -> "EligibilityDecision":
        return cls(EligibilityOutcome.DENIED, reason)

    @classmethod
    def already_enrolled(cls) -> "EligibilityDecision":
        return cls(EligibilityOutcome.ALREADY_ENROLLED)


@dataclass(frozen=True)
class EnrollmentResult:
    """Enrollment outcome; already_enrolled marks the idempotent path."""

    student_id: str
    course_offering_id: str
    already_enrolled: bool = False
    enrollment_id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class EnrolledOffering:
    """One row of a student's own enrollment list."""

    enrollment_id: str
    offering: OfferingResult
    enrolled_at: datetime


@dataclass(frozen=True)
class EligibleStudent:
    """One row of the roster eligibility list."""

    student_id: str
    profile_id: str
    matric_no: str
    first_name: str
    last_name: str
    email: str
    level: str | None = None
