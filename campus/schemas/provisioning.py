"""Provisioning API schemas (students, staff, admin invites)."""

from datetime import date

from pydantic import BaseModel, EmailStr, Field, SecretStr, field_validator

from campus.domain.enums import AdmissionType, Unit


class PersonFields(BaseModel):
    """Profile fields shared by every provisioning request."""

    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=32)
    gender: str | None = None
    date_of_birth: date | None = None
    state_of_origin: str | None = None
    lga_of_origin: str | None = None
    nin: str | None = Field(default=None, max_length=32)
    religion: str | None = None
    address: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v


class StudentCreateRequest(PersonFields):
    """Request body for POST /students.

    direct_entry admissions also require previous_school and
    previous_qualification. If password is omitted a temporary one is
    generated and returned once.
    """

    program_id: str = Field(..., min_length=1)
    session_id: str = Field(..., min_length=1)
    department_id: str | None = None
    admission_type: AdmissionType = AdmissionType.FRESH
    previous_school: str | None = None
    previous_qualification: str | None = None
    special_needs: str | None = None
    level: str | None = None
    enrollment_date: date | None = None
    guardian_first_name: str | None = None
    guardian_last_name: str | None = None
    guardian_phone: str | None = None
    guardian_status: str | None = None
    password: SecretStr | None = Field(default=None, description="Optional initial password (min 8 chars)")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: SecretStr | None) -> SecretStr | None:
        if v is not None and len(v.get_secret_value()) < 8:
            raise ValueError("password must be at least 8 characters")
        return v


class StaffCreateRequest(PersonFields):
    """Request body for POST /staff. unit is required for non-academic staff."""

    role: str = Field(..., pattern=r"^(academic_staff|non_academic_staff)$")
    department_id: str | None = None
    designation: str | None = None
    specialization: str | None = None
    unit: Unit | None = None
    hire_date: date | None = None
    password: SecretStr | None = None

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: SecretStr | None) -> SecretStr | None:
        if v is not None and len(v.get_secret_value()) < 8:
            raise ValueError("password must be at least 8 characters")
        return v


class AdminInviteRequest(BaseModel):
    """Request body for POST /admins/invite."""

    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = None


class ProvisioningResponse(BaseModel):
    """Result of a provisioning saga.

    temporary_password is only present when the server generated it; it is
    never stored or returned again.
    """

    profile_id: str
    role_record_id: str | None = None
    code: str | None = None
    temporary_password: str | None = None
    warnings: list[str] = Field(default_factory=list)
