"""Capability guard: maps a resolved principal to allow/deny for a capability.

Pure function over the principal; the role and unit lookups happen in the
principal resolver. Offering assignment for academic staff is checked by the
caller (course_offering_staff join), not here.
"""

from enum import Enum
from typing import assert_never

from campus.domain.enums import Unit
from campus.domain.exceptions import AuthorizationException
from campus.domain.value_objects import (
    AcademicStaffPrincipal,
    AdminPrincipal,
    NonAcademicStaffPrincipal,
    Principal,
    StudentPrincipal,
)


class Capability(str, Enum):
    """Named permission. Each carries the unit it requires (None = admin only)."""

    PROVISION_STUDENT = "provision_student"
    REVIEW_APPLICATION = "review_application"
    CONVERT_APPLICATION = "convert_application"
    PROVISION_STAFF = "provision_staff"
    INVITE_ADMIN = "invite_admin"
    PUBLISH_OFFERING = "publish_offering"
    VIEW_ROSTER = "view_roster"
    MANAGE_ENROLLMENTS = "manage_enrollments"

    @property
    def required_unit(self) -> Unit | None:
        return _REQUIRED_UNIT[self]

    @property
    def offering_scoped(self) -> bool:
        return self in _OFFERING_SCOPED


_REQUIRED_UNIT: dict[Capability, Unit | None] = {
    Capability.PROVISION_STUDENT: Unit.ADMISSIONS,
    Capability.REVIEW_APPLICATION: Unit.ADMISSIONS,
    Capability.CONVERT_APPLICATION: Unit.ADMISSIONS,
    Capability.PROVISION_STAFF: None,
    Capability.INVITE_ADMIN: None,
    Capability.PUBLISH_OFFERING: None,
    Capability.VIEW_ROSTER: Unit.EXAMS,
    Capability.MANAGE_ENROLLMENTS: Unit.EXAMS,
}

_OFFERING_SCOPED = frozenset({Capability.VIEW_ROSTER, Capability.MANAGE_ENROLLMENTS})


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


def authorize(principal: Principal | None, capability: Capability) -> Decision:
    """Return ALLOW or DENY for principal and capability.

    admin: everything. academic staff: offering-scoped capabilities only.
    non-academic staff: only when the capability's unit equals theirs.
    student and missing profile (None): nothing.
    """
    if principal is None:
        return Decision.DENY
    if isinstance(principal, AdminPrincipal):
        return Decision.ALLOW
    if isinstance(principal, AcademicStaffPrincipal):
        return Decision.ALLOW if capability.offering_scoped else Decision.DENY
    if isinstance(principal, NonAcademicStaffPrincipal):
        required = capability.required_unit
        if required is not None and principal.unit is required:
            return Decision.ALLOW
        return Decision.DENY
    if isinstance(principal, StudentPrincipal):
        return Decision.DENY
    assert_never(principal)


def require(principal: Principal | None, capability: Capability) -> None:
    """Raise AuthorizationException unless authorize() allows."""
    if authorize(principal, capability) is Decision.DENY:
        raise AuthorizationException(capability=capability.value)
