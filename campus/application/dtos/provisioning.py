"""DTOs for the provisioning saga (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import date

from campus.domain.enums import AdmissionType, Role, Unit


@dataclass(frozen=True)
class StudentDetails:
    """Student-only provisioning fields."""

    program_id: str
    session_id: str
    admission_type: AdmissionType = AdmissionType.FRESH
    department_id: str | None = None
    previous_school: str | None = None
    previous_qualification: str | None = None
    special_needs: str | None = None
    level: str | None = None
    enrollment_date: date | None = None
    guardian_first_name: str | None = None
    guardian_last_name: str | None = None
    guardian_phone: str | None = None
    guardian_status: str | None = None


@dataclass(frozen=True)
class StaffDetails:
    """Staff-only provisioning fields. unit applies to non-academic staff."""

    department_id: str | None = None
    designation: str | None = None
    specialization: str | None = None
    unit: Unit | None = None
    hire_date: date | None = None


@dataclass(frozen=True)
class ProvisioningRequest:
    """Input to ProvisioningSaga.provision.

    invite=True creates a pending identity and lets the identity store send
    the invite; otherwise a random credential is generated when password is
    None and returned once on the result.
    """

    role: Role
    email: str
    first_name: str
    last_name: str
    middle_name: str | None = None
    phone: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    state_of_origin: str | None = None
    lga_of_origin: str | None = None
    nin: str | None = None
    religion: str | None = None
    address: str | None = None
    password: str | None = None
    invite: bool = False
    student: StudentDetails | None = None
    staff: StaffDetails | None = None


@dataclass(frozen=True)
class IdentityResult:
    """Identity created in the external identity store."""

    id: str
    email: str


@dataclass(frozen=True)
class ProfileCreate:
    """Profile row to insert; id is the identity id."""

    id: str
    email: str
    role: Role
    first_name: str
    last_name: str
    middle_name: str | None = None
    phone: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    state_of_origin: str | None = None
    lga_of_origin: str | None = None
    nin: str | None = None
    religion: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class ProvisioningResult:
    """Outcome of a successful saga.

    role_record_id and code are None for admin invites (no RoleRecord).
    generated_credential is only set when the saga generated the password.
    warnings lists follow-up steps that failed after the saga committed.
    """

    profile_id: str
    role_record_id: str | None
    code: str | None
    generated_credential: str | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)
