"""Principal: the resolved caller, as a closed tagged variant over roles.

The four variants mirror Role exactly. Code that dispatches on a principal
uses isinstance checks ending in assert_never so that adding a role is a
type error until every call site handles it.
"""

from __future__ import annotations

from dataclasses import dataclass

from campus.domain.enums import Role, Unit


@dataclass(frozen=True)
class AdminPrincipal:
    identity_id: str
    email: str

    @property
    def role(self) -> Role:
        return Role.ADMIN


@dataclass(frozen=True)
class StudentPrincipal:
    identity_id: str
    email: str
    student_id: str | None = None

    @property
    def role(self) -> Role:
        return Role.STUDENT


@dataclass(frozen=True)
class AcademicStaffPrincipal:
    identity_id: str
    email: str
    staff_id: str | None = None

    @property
    def role(self) -> Role:
        return Role.ACADEMIC_STAFF


@dataclass(frozen=True)
class NonAcademicStaffPrincipal:
    """Non-academic staff; unit comes from the staff record, never from the role."""

    identity_id: str
    email: str
    unit: Unit | None
    staff_id: str | None = None

    @property
    def role(self) -> Role:
        return Role.NON_ACADEMIC_STAFF


Principal = (
    AdminPrincipal
    | StudentPrincipal
    | AcademicStaffPrincipal
    | NonAcademicStaffPrincipal
)
