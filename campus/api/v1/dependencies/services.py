"""Service and repository dependencies (composition root).

Use cases are built from infrastructure implementations here; routes depend
only on these functions, never on infrastructure directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from campus.application.services.eligibility_gate import EligibilityGate
from campus.application.services.provisioning_saga import ProvisioningSaga
from campus.application.services.sequence_codes import SequenceCodeService
from campus.application.use_cases.applications import (
    ConvertApplicationUseCase,
    ReviewApplicationUseCase,
)
from campus.application.use_cases.enrollments import EnrollmentService
from campus.application.use_cases.offerings import PublishOfferingUseCase
from campus.core.config import get_settings
from campus.domain.exceptions import DependencyException
from campus.infrastructure.identity import IdentityStoreClient
from campus.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    get_session_factory,
)
from campus.infrastructure.persistence.repositories import (
    ApplicationRepository,
    EnrollmentRepository,
    OfferingRepository,
    SqlProvisioningStore,
    SqlSequenceAllocator,
)


def get_identity_store(request: Request) -> IdentityStoreClient:
    """Identity store client on the shared HTTP client from the lifespan."""
    http_client = getattr(request.app.state, "identity_http_client", None)
    if http_client is None:
        raise DependencyException("identity_store", "HTTP client not initialized")
    settings = get_settings()
    return IdentityStoreClient(
        http_client,
        settings.identity_store_url,
        settings.identity_store_service_key.get_secret_value(),
        timeout_seconds=settings.identity_store_timeout_seconds,
        invite_redirect_url=settings.invite_redirect_url,
    )


def get_provisioning_store() -> SqlProvisioningStore:
    """Provisioning store; one committed transaction per call."""
    return SqlProvisioningStore(get_session_factory())


def get_sequence_code_service() -> SequenceCodeService:
    settings = get_settings()
    return SequenceCodeService(
        SqlSequenceAllocator(get_session_factory()),
        matric_prefix=settings.matric_prefix,
        staff_prefix=settings.staff_code_prefix,
        generic_namespace=settings.generic_namespace,
    )


def get_provisioning_saga(
    identity_store: Annotated[IdentityStoreClient, Depends(get_identity_store)],
    store: Annotated[SqlProvisioningStore, Depends(get_provisioning_store)],
    codes: Annotated[SequenceCodeService, Depends(get_sequence_code_service)],
) -> ProvisioningSaga:
    return ProvisioningSaga(
        identity_store,
        store,
        codes,
        step_timeout_seconds=get_settings().saga_step_timeout_seconds,
    )


async def get_application_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ApplicationRepository:
    return ApplicationRepository(db)


async def get_application_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApplicationRepository:
    return ApplicationRepository(db)


async def get_review_application_use_case(
    applications: Annotated[ApplicationRepository, Depends(get_application_repo_for_write)],
) -> ReviewApplicationUseCase:
    return ReviewApplicationUseCase(applications)


async def get_convert_application_use_case(
    applications: Annotated[ApplicationRepository, Depends(get_application_repo)],
    store: Annotated[SqlProvisioningStore, Depends(get_provisioning_store)],
    saga: Annotated[ProvisioningSaga, Depends(get_provisioning_saga)],
) -> ConvertApplicationUseCase:
    return ConvertApplicationUseCase(applications, store, saga)


async def get_offering_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OfferingRepository:
    """Offering repository for read operations."""
    return OfferingRepository(db)


async def get_eligibility_gate(
    offerings: Annotated[OfferingRepository, Depends(get_offering_repo)],
) -> EligibilityGate:
    return EligibilityGate(offerings)


async def get_enrollment_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> EnrollmentService:
    """Gate reads and the insert share the request transaction."""
    return EnrollmentService(EligibilityGate(OfferingRepository(db)), EnrollmentRepository(db))


async def get_publish_offering_use_case(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> PublishOfferingUseCase:
    return PublishOfferingUseCase(OfferingRepository(db))
