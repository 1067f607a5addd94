"""Provisioning store: the relational half of the provisioning saga.

Each method opens its own short transaction and commits before returning.
Unique-constraint violations (SQLSTATE 23505) become ConflictException, foreign
key and check violations become ValidationException. The profile email
constraint is the source of truth for duplicate provisioning.
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError

from campus.application.dtos.provisioning import (
    ProfileCreate,
    StaffDetails,
    StudentDetails,
)
from campus.domain.enums import OnboardingStatus, RegistrationStatus
from campus.domain.exceptions import (
    ConflictException,
    EmailAlreadyRegisteredException,
    ValidationException,
)
from campus.infrastructure.persistence.models import (
    Application,
    ApplicationDocument,
    Department,
    Profile,
    Program,
    Staff,
    Student,
    StudentDocument,
    StudentRegistration,
)
from campus.infrastructure.persistence.repositories.base import TransactionalStore
from campus.shared.utils.datetime import utc_today
from campus.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """True if the driver reports SQLSTATE 23503."""
    return _sqlstate(exc) == FOREIGN_KEY_VIOLATION


def is_unique_violation(exc: IntegrityError) -> bool:
    """True if the driver reports SQLSTATE 23505."""
    return _sqlstate(exc) == UNIQUE_VIOLATION


class SqlProvisioningStore(TransactionalStore):
    """IProvisioningStore over SQLAlchemy, one transaction per call."""

    async def email_exists(self, email: str) -> bool:
        async with self.transaction() as session:
            result = await session.execute(
                select(Profile.id).where(Profile.email == email).limit(1)
            )
            return result.scalar_one_or_none() is not None

    async def create_profile(self, data: ProfileCreate) -> str:
        profile = Profile(
            id=data.id,
            email=data.email,
            role=data.role.value,
            onboarding_status=OnboardingStatus.PENDING.value,
            first_name=data.first_name,
            middle_name=data.middle_name,
            last_name=data.last_name,
            phone=data.phone,
            gender=data.gender,
            date_of_birth=data.date_of_birth,
            state_of_origin=data.state_of_origin,
            lga_of_origin=data.lga_of_origin,
            nin=data.nin,
            religion=data.religion,
            address=data.address,
        )
        try:
            async with self.transaction() as session:
                session.add(profile)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise EmailAlreadyRegisteredException(data.email) from e
            raise ValidationException(
                "Profile violates a data constraint", field="profile"
            ) from e
        return data.id

    async def delete_profile(self, profile_id: str) -> None:
        async with self.transaction() as session:
            await session.execute(delete(Profile).where(Profile.id == profile_id))

    async def get_program_code(self, program_id: str) -> str | None:
        async with self.transaction() as session:
            result = await session.execute(
                select(Program.code).where(Program.id == program_id)
            )
            return result.scalar_one_or_none()

    async def get_department_code(self, department_id: str) -> str | None:
        async with self.transaction() as session:
            result = await session.execute(
                select(Department.code).where(Department.id == department_id)
            )
            return result.scalar_one_or_none()

    async def create_student(
        self, profile_id: str, matric_no: str, details: StudentDetails
    ) -> str:
        student = Student(
            profile_id=profile_id,
            matric_no=matric_no,
            program_id=details.program_id,
            department_id=details.department_id,
            admission_session_id=details.session_id,
            admission_type=details.admission_type.value,
            previous_school=details.previous_school,
            previous_qualification=details.previous_qualification,
            special_needs=details.special_needs,
            level=details.level,
            enrollment_date=details.enrollment_date or utc_today(),
            guardian_first_name=details.guardian_first_name,
            guardian_last_name=details.guardian_last_name,
            guardian_phone=details.guardian_phone,
            guardian_status=details.guardian_status,
        )
        try:
            async with self.transaction() as session:
                session.add(student)
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationException(
                    "Program, department or session not found", field="program_id"
                ) from e
            if not is_unique_violation(e):
                raise ValidationException(
                    "Student record violates a data constraint", field="student"
                ) from e
            raise ConflictException(
                "Student record already exists", "student", {"matric_no": matric_no}
            ) from e
        return student.id

    async def create_staff(
        self, profile_id: str, staff_no: str, details: StaffDetails
    ) -> str:
        staff = Staff(
            profile_id=profile_id,
            staff_no=staff_no,
            department_id=details.department_id,
            designation=details.designation,
            specialization=details.specialization,
            unit=details.unit.value if details.unit else None,
            hire_date=details.hire_date,
        )
        try:
            async with self.transaction() as session:
                session.add(staff)
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationException(
                    "Department not found", field="department_id"
                ) from e
            if not is_unique_violation(e):
                raise ValidationException(
                    "Staff record violates a data constraint", field="staff"
                ) from e
            raise ConflictException(
                "Staff record already exists", "staff", {"staff_no": staff_no}
            ) from e
        return staff.id

    async def upsert_registration(
        self, student_id: str, session_id: str, level: str | None
    ) -> None:
        stmt = insert(StudentRegistration).values(
            id=generate_cuid(),
            student_id=student_id,
            session_id=session_id,
            level=level,
            status=RegistrationStatus.REGISTERED.value,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[StudentRegistration.student_id, StudentRegistration.session_id],
            set_={"status": RegistrationStatus.REGISTERED.value, "level": stmt.excluded.level},
        )
        async with self.transaction() as session:
            await session.execute(stmt)

    async def copy_application_documents(
        self, application_id: str, student_id: str
    ) -> int:
        async with self.transaction() as session:
            result = await session.execute(
                select(ApplicationDocument).where(
                    ApplicationDocument.application_id == application_id
                )
            )
            documents = list(result.scalars().all())
            session.add_all(
                StudentDocument(
                    student_id=student_id,
                    doc_type=doc.doc_type,
                    bucket=doc.bucket,
                    path=doc.path,
                    original_name=doc.original_name,
                    mime_type=doc.mime_type,
                )
                for doc in documents
            )
        return len(documents)

    async def link_application(self, application_id: str, student_id: str) -> None:
        async with self.transaction() as session:
            await session.execute(
                update(Application)
                .where(Application.id == application_id)
                .values(converted_student_id=student_id)
            )
