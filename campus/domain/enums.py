"""Domain enumerations.

Enums represent closed sets of domain values (roles, statuses, units,
document types).
"""

from enum import Enum


class ValuesMixin:
    """Adds values() to str enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation or serialization)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class Role(ValuesMixin, str, Enum):
    """Profile role tag. Closed set; every dispatch on it must be exhaustive."""

    ADMIN = "admin"
    STUDENT = "student"
    ACADEMIC_STAFF = "academic_staff"
    NON_ACADEMIC_STAFF = "non_academic_staff"

    @property
    def is_staff(self) -> bool:
        return self in (Role.ACADEMIC_STAFF, Role.NON_ACADEMIC_STAFF)


class Unit(ValuesMixin, str, Enum):
    """Operational unit of a non-academic staff member."""

    ADMISSIONS = "admissions"
    BURSARY = "bursary"
    EXAMS = "exams"


class OnboardingStatus(ValuesMixin, str, Enum):
    """Profile onboarding status. Flipped to ACTIVE by the activation flow."""

    PENDING = "pending"
    ACTIVE = "active"


class RecordStatus(ValuesMixin, str, Enum):
    """Student/staff record status."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    GRADUATED = "graduated"
    WITHDRAWN = "withdrawn"


class ApplicationStatus(ValuesMixin, str, Enum):
    """Application lifecycle. ACCEPTED and REJECTED are terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ApplicationStatus.PENDING


class RegistrationStatus(ValuesMixin, str, Enum):
    """Session registration status. Only REGISTERED unlocks enrollment."""

    REGISTERED = "registered"
    PENDING = "pending"
    DEFERRED = "deferred"
    CANCELLED = "cancelled"


class AdmissionType(ValuesMixin, str, Enum):
    """How a student was admitted."""

    FRESH = "fresh"
    DIRECT_ENTRY = "direct_entry"


class SponsorshipType(ValuesMixin, str, Enum):
    """Who sponsors an applicant. Absence means self-sponsored."""

    GOVERNMENT = "government"
    SCHOOL_OWNER = "school_owner"
    EXTERNAL_BODY = "external_body"


class DocumentType(ValuesMixin, str, Enum):
    """Closed set of document type tags for applications and students."""

    PASSPORT = "passport"
    SIGNATURE = "signature"
    ACADEMIC_RESULT = "academic_result"
    BIRTH_OR_AGE = "birth_or_age"
    SPONSORSHIP_LETTER = "sponsorship_letter"
    # LGA certificate or medical report; a single slot.
    SUPPORTING_OPTIONAL = "supporting_optional"


class CodeKind(ValuesMixin, str, Enum):
    """Kind of human-readable sequential code."""

    MATRIC = "matric"
    STAFF = "staff"
