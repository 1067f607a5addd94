"""Service interfaces (ports) for external collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from campus.application.dtos.provisioning import IdentityResult


class IIdentityStore(Protocol):
    """External authentication system (admin API).

    Implementations raise ConflictException when the email is already
    registered and DependencyException on transport failure, timeout or 5xx.
    """

    async def create_user(
        self, email: str, password: str, metadata: dict[str, Any] | None = None
    ) -> IdentityResult:
        """Create a confirmed identity with a password."""

    async def invite_user(
        self, email: str, metadata: dict[str, Any] | None = None
    ) -> IdentityResult:
        """Create a pending identity and send the invite email."""

    async def delete_user(self, identity_id: str) -> None:
        """Delete identity (404 treated as already deleted)."""
