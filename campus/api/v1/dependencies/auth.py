"""Authentication and capability dependencies.

Bearer JWT (issued by the identity store) -> identity id -> Principal via
two explicit lookups -> capability guard. A missing profile resolves to
None and is denied by the guard, never by a 500.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from campus.application.services.capability_guard import Capability, require
from campus.core.config import get_settings
from campus.domain.enums import RecordStatus
from campus.domain.exceptions import AuthenticationException, AuthorizationException
from campus.domain.value_objects import (
    AcademicStaffPrincipal,
    Principal,
    StudentPrincipal,
)
from campus.infrastructure.persistence.database import get_db
from campus.infrastructure.persistence.repositories import (
    OfferingRepository,
    PrincipalResolver,
)
from campus.infrastructure.security.jwt import verify_token

from .services import get_offering_repo

_http_bearer = HTTPBearer(auto_error=False)


def get_identity_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str:
    """Return the identity id (sub) from the bearer token; 401 otherwise."""
    if not credentials:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from e
    return str(payload["sub"])


async def get_principal_resolver(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PrincipalResolver:
    return PrincipalResolver(db)


async def get_current_principal(
    identity_id: Annotated[str, Depends(get_identity_id)],
    resolver: Annotated[PrincipalResolver, Depends(get_principal_resolver)],
) -> Principal | None:
    """Resolved caller, or None when no profile is bound to the identity."""
    return await resolver.resolve(identity_id)


def require_capability(capability: Capability):
    """Dependency factory: authenticated caller allowed the capability."""

    async def _require(
        principal: Annotated[Principal | None, Depends(get_current_principal)],
    ) -> Principal:
        require(principal, capability)
        assert principal is not None
        return principal

    return _require


def require_offering_capability(capability: Capability):
    """Dependency factory for offering-scoped routes.

    Academic staff must also be assigned to the offering in the path.
    """

    async def _require(
        offering_id: Annotated[str, Path()],
        principal: Annotated[Principal | None, Depends(get_current_principal)],
        offerings: Annotated[OfferingRepository, Depends(get_offering_repo)],
    ) -> Principal:
        require(principal, capability)
        if isinstance(principal, AcademicStaffPrincipal):
            if principal.staff_id is None or not await offerings.is_staff_assigned(
                offering_id, principal.staff_id
            ):
                raise AuthorizationException(
                    capability=capability.value,
                )
        assert principal is not None
        return principal

    return _require


async def require_super_admin(
    principal: Annotated[Principal, Depends(require_capability(Capability.INVITE_ADMIN))],
) -> Principal:
    """Admin invites: capability plus the SUPER_ADMIN_EMAILS allowlist."""
    if principal.email.strip().lower() not in get_settings().super_admin_email_list:
        raise AuthorizationException(message="Only super admins can invite administrators")
    return principal


async def get_current_student(
    principal: Annotated[Principal | None, Depends(get_current_principal)],
    offerings: Annotated[OfferingRepository, Depends(get_offering_repo)],
) -> StudentPrincipal:
    """Student self-service: caller must be a student with an active record."""
    if not isinstance(principal, StudentPrincipal) or principal.student_id is None:
        raise AuthorizationException(message="Student account required")
    student = await offerings.get_student(principal.student_id)
    if student is None or student.status != RecordStatus.ACTIVE.value:
        raise AuthorizationException(message="Student record is not active")
    return principal
