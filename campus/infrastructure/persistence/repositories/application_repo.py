"""Application repository. Interface methods return application DTOs."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus.application.dtos.application import ApplicationResult, DocumentRef
from campus.domain.enums import ApplicationStatus, DocumentType, SponsorshipType
from campus.infrastructure.persistence.models import Application, ApplicationDocument
from campus.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_store_errors,
)
from campus.shared.utils.datetime import ensure_utc


def _application_to_result(a: Application) -> ApplicationResult:
    """Map ORM Application to ApplicationResult."""
    return ApplicationResult(
        id=a.id,
        email=a.email,
        first_name=a.first_name,
        last_name=a.last_name,
        program_id=a.program_id,
        session_id=a.session_id,
        status=ApplicationStatus(a.status),
        sponsorship_type=SponsorshipType(a.sponsorship_type) if a.sponsorship_type else None,
        middle_name=a.middle_name,
        phone=a.phone,
        gender=a.gender,
        date_of_birth=a.date_of_birth,
        state_of_origin=a.state_of_origin,
        lga_of_origin=a.lga_of_origin,
        nin=a.nin,
        religion=a.religion,
        address=a.address,
        guardian_first_name=a.guardian_first_name,
        guardian_last_name=a.guardian_last_name,
        guardian_phone=a.guardian_phone,
        guardian_status=a.guardian_status,
        rejection_reason=a.rejection_reason,
        reviewed_by=a.reviewed_by,
        reviewed_at=ensure_utc(a.reviewed_at),
        converted_student_id=a.converted_student_id,
    )


def _document_to_ref(d: ApplicationDocument) -> DocumentRef:
    return DocumentRef(
        id=d.id,
        doc_type=DocumentType(d.doc_type),
        bucket=d.bucket,
        path=d.path,
        original_name=d.original_name,
        mime_type=d.mime_type,
    )


class ApplicationRepository(BaseRepository[Application]):
    """Application reads and the conditional review update."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Application)

    async def get_by_id(self, application_id: str) -> ApplicationResult | None:
        application = await super().get_by_id(application_id)
        return _application_to_result(application) if application else None

    async def list_documents(self, application_id: str) -> list[DocumentRef]:
        async with translate_store_errors():
            result = await self.db.execute(
                select(ApplicationDocument)
                .where(ApplicationDocument.application_id == application_id)
                .order_by(ApplicationDocument.created_at)
            )
        return [_document_to_ref(d) for d in result.scalars().all()]

    async def mark_reviewed(
        self,
        application_id: str,
        status: ApplicationStatus,
        reviewer_id: str,
        reviewed_at: datetime,
        rejection_reason: str | None = None,
    ) -> ApplicationResult | None:
        """Conditional update (WHERE status = 'pending'); None if it matched nothing."""
        stmt = (
            update(Application)
            .where(
                Application.id == application_id,
                Application.status == ApplicationStatus.PENDING.value,
            )
            .values(
                status=status.value,
                reviewed_by=reviewer_id,
                reviewed_at=reviewed_at,
                rejection_reason=rejection_reason,
            )
            .returning(Application)
            .execution_options(synchronize_session=False)
        )
        async with translate_store_errors():
            result = await self.db.execute(stmt)
        application = result.scalar_one_or_none()
        return _application_to_result(application) if application else None
