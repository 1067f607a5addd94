"""DTOs for the orphaned-profile reconciliation scan."""

from dataclasses import dataclass
from datetime import datetime

from campus.domain.enums import Role


@dataclass(frozen=True)
class OrphanedProfile:
    """Profile with a RoleRecord-bearing role but no RoleRecord."""

    profile_id: str
    email: str
    role: Role
    created_at: datetime


@dataclass(frozen=True)
class ReconciliationReport:
    found: tuple[OrphanedProfile, ...]
    repaired: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
