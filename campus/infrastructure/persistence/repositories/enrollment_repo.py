"""Enrollment repository: insert (unique pair), withdraw, list own."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus.application.dtos.enrollment import EnrolledOffering, EnrollmentResult
from campus.infrastructure.persistence.models import CourseOffering, Enrollment
from campus.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_store_errors,
)
from campus.infrastructure.persistence.repositories.offering_repo import (
    offering_to_result,
)
from campus.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


class EnrollmentRepository(BaseRepository[Enrollment]):
    """IEnrollmentRepository over the request-scoped transactional session."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Enrollment)

    async def create(self, student_id: str, offering_id: str) -> EnrollmentResult | None:
        """Insert in a savepoint so a duplicate does not poison the request transaction."""
        enrollment = Enrollment(student_id=student_id, course_offering_id=offering_id)
        try:
            async with translate_store_errors():
                async with self.db.begin_nested():
                    self.db.add(enrollment)
                    await self.db.flush()
        except IntegrityError:
            logger.info(
                "Enrollment %s/%s already exists (concurrent insert)",
                student_id,
                offering_id,
            )
            return None
        await self.db.refresh(enrollment)
        return EnrollmentResult(
            student_id=student_id,
            course_offering_id=offering_id,
            enrollment_id=enrollment.id,
            created_at=ensure_utc(enrollment.created_at),
        )

    async def delete(self, student_id: str, offering_id: str) -> bool:
        async with translate_store_errors():
            result = await self.db.execute(
                delete(Enrollment)
                .where(
                    Enrollment.student_id == student_id,
                    Enrollment.course_offering_id == offering_id,
                )
                .returning(Enrollment.id)
            )
        return result.scalar_one_or_none() is not None

    async def list_for_student(
        self, student_id: str, session_id: str | None = None
    ) -> list[EnrolledOffering]:
        stmt = (
            select(Enrollment, CourseOffering)
            .join(CourseOffering, CourseOffering.id == Enrollment.course_offering_id)
            .where(Enrollment.student_id == student_id)
            .order_by(Enrollment.created_at.desc())
        )
        if session_id:
            stmt = stmt.where(CourseOffering.session_id == session_id)
        async with translate_store_errors():
            result = await self.db.execute(stmt)
        return [
            EnrolledOffering(
                enrollment_id=enrollment.id,
                offering=offering_to_result(offering),
                enrolled_at=ensure_utc(enrollment.created_at),
            )
            for enrollment, offering in result.all()
        ]
