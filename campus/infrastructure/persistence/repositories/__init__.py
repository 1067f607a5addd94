"""Persistence repositories. Re-exports for dependency injection."""

from campus.infrastructure.persistence.repositories.application_repo import (
    ApplicationRepository,
)
from campus.infrastructure.persistence.repositories.base import (
    BaseRepository,
    TransactionalStore,
)
from campus.infrastructure.persistence.repositories.enrollment_repo import (
    EnrollmentRepository,
)
from campus.infrastructure.persistence.repositories.offering_repo import (
    OfferingRepository,
)
from campus.infrastructure.persistence.repositories.principal_resolver import (
    PrincipalResolver,
)
from campus.infrastructure.persistence.repositories.provisioning_store import (
    SqlProvisioningStore,
)
from campus.infrastructure.persistence.repositories.reconciliation_repo import (
    SqlReconciliationRepository,
)
from campus.infrastructure.persistence.repositories.sequence_allocator import (
    SqlSequenceAllocator,
)

__all__ = [
    "ApplicationRepository",
    "BaseRepository",
    "EnrollmentRepository",
    "OfferingRepository",
    "PrincipalResolver",
    "SqlProvisioningStore",
    "SqlReconciliationRepository",
    "SqlSequenceAllocator",
    "TransactionalStore",
]
