"""Offering repository: eligibility reads, roster population, staff assignment,
and the publish flag."""

from sqlalchemy import and_, exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus.application.dtos.enrollment import (
    EligibleStudent,
    OfferingResult,
    StudentRecordResult,
)
from campus.domain.enums import RecordStatus, RegistrationStatus
from campus.infrastructure.persistence.models import (
    CourseOffering,
    CourseOfferingProgram,
    CourseOfferingStaff,
    Enrollment,
    Profile,
    Student,
    StudentRegistration,
)
from campus.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_store_errors,
)


def offering_to_result(o: CourseOffering) -> OfferingResult:
    """Map ORM CourseOffering to OfferingResult."""
    return OfferingResult(
        id=o.id,
        course_code=o.course_code,
        title=o.title,
        session_id=o.session_id,
        semester=o.semester,
        program_id=o.program_id,
        level=o.level,
        is_published=o.is_published,
    )


def _student_to_result(s: Student) -> StudentRecordResult:
    return StudentRecordResult(
        id=s.id,
        profile_id=s.profile_id,
        matric_no=s.matric_no,
        program_id=s.program_id,
        status=s.status,
        level=s.level,
    )


class OfferingRepository(BaseRepository[CourseOffering]):
    """IOfferingRepository over the request-scoped session."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, CourseOffering)

    async def _scalar(self, stmt):
        async with translate_store_errors():
            result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_offering(self, offering_id: str) -> OfferingResult | None:
        offering = await self.get_by_id(offering_id)
        return offering_to_result(offering) if offering else None

    async def get_student(self, student_id: str) -> StudentRecordResult | None:
        student = await self._scalar(select(Student).where(Student.id == student_id))
        return _student_to_result(student) if student else None

    async def get_student_by_profile(self, profile_id: str) -> StudentRecordResult | None:
        student = await self._scalar(
            select(Student).where(Student.profile_id == profile_id)
        )
        return _student_to_result(student) if student else None

    async def is_registered(self, student_id: str, session_id: str) -> bool:
        return bool(
            await self._scalar(
                select(
                    exists().where(
                        StudentRegistration.student_id == student_id,
                        StudentRegistration.session_id == session_id,
                        StudentRegistration.status == RegistrationStatus.REGISTERED.value,
                    )
                )
            )
        )

    async def get_linked_program_ids(self, offering_id: str) -> set[str]:
        async with translate_store_errors():
            result = await self.db.execute(
                select(CourseOfferingProgram.program_id).where(
                    CourseOfferingProgram.course_offering_id == offering_id
                )
            )
        return set(result.scalars().all())

    async def is_enrolled(self, student_id: str, offering_id: str) -> bool:
        return bool(
            await self._scalar(
                select(
                    exists().where(
                        Enrollment.student_id == student_id,
                        Enrollment.course_offering_id == offering_id,
                    )
                )
            )
        )

    async def list_eligible_students(
        self, offering: OfferingResult, program_ids: set[str]
    ) -> list[EligibleStudent]:
        already_enrolled = exists().where(
            Enrollment.student_id == Student.id,
            Enrollment.course_offering_id == offering.id,
        )
        stmt = (
            select(Student, Profile)
            .join(Profile, Profile.id == Student.profile_id)
            .join(
                StudentRegistration,
                and_(
                    StudentRegistration.student_id == Student.id,
                    StudentRegistration.session_id == offering.session_id,
                    StudentRegistration.status == RegistrationStatus.REGISTERED.value,
                ),
            )
            .where(
                Student.status == RecordStatus.ACTIVE.value,
                Student.program_id.in_(program_ids),
                ~already_enrolled,
            )
            .order_by(Student.matric_no)
        )
        if offering.level:
            stmt = stmt.where(Student.level == offering.level)
        async with translate_store_errors():
            result = await self.db.execute(stmt)
        return [
            EligibleStudent(
                student_id=student.id,
                profile_id=profile.id,
                matric_no=student.matric_no,
                first_name=profile.first_name,
                last_name=profile.last_name,
                email=profile.email,
                level=student.level,
            )
            for student, profile in result.all()
        ]

    async def is_staff_assigned(self, offering_id: str, staff_id: str) -> bool:
        return bool(
            await self._scalar(
                select(
                    exists().where(
                        CourseOfferingStaff.course_offering_id == offering_id,
                        CourseOfferingStaff.staff_id == staff_id,
                    )
                )
            )
        )

    async def set_published(
        self, offering_id: str, published: bool
    ) -> OfferingResult | None:
        stmt = (
            update(CourseOffering)
            .where(CourseOffering.id == offering_id)
            .values(is_published=published)
            .returning(CourseOffering)
            .execution_options(synchronize_session=False)
        )
        async with translate_store_errors():
            result = await self.db.execute(stmt)
        offering = result.scalar_one_or_none()
        return offering_to_result(offering) if offering else None
