"""Student RoleRecord, session registration, and student document ORM models."""

from datetime import date

from sqlalchemy import Date, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from campus.domain.enums import (
    AdmissionType,
    DocumentType,
    RecordStatus,
    RegistrationStatus,
)
from campus.infrastructure.persistence.database import Base
from campus.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    EntityModel,
    enum_check,
)


class Student(EntityModel, Base):
    """Student. Table: student. One per profile; matric_no assigned once at creation."""

    __tablename__ = "student"

    profile_id: Mapped[str] = mapped_column(
        String, ForeignKey("profile.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    matric_no: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    program_id: Mapped[str] = mapped_column(
        String, ForeignKey("program.id"), nullable=False, index=True
    )
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True
    )
    admission_session_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("academic_session.id", ondelete="SET NULL"), nullable=True
    )
    admission_type: Mapped[str] = mapped_column(
        String, nullable=False, default=AdmissionType.FRESH.value
    )
    previous_school: Mapped[str | None] = mapped_column(String, nullable=True)
    previous_qualification: Mapped[str | None] = mapped_column(String, nullable=True)
    special_needs: Mapped[str | None] = mapped_column(String, nullable=True)
    level: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=RecordStatus.ACTIVE.value, index=True
    )
    enrollment_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    guardian_first_name: Mapped[str | None] = mapped_column(String, nullable=True)
    guardian_last_name: Mapped[str | None] = mapped_column(String, nullable=True)
    guardian_phone: Mapped[str | None] = mapped_column(String, nullable=True)
    guardian_status: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        enum_check("admission_type", AdmissionType.values(), "student_admission_type_check"),
        enum_check("status", RecordStatus.values(), "student_status_check"),
    )


class StudentRegistration(EntityModel, Base):
    """Registration of a student for a session. Table: student_registration."""

    __tablename__ = "student_registration"

    student_id: Mapped[str] = mapped_column(
        String, ForeignKey("student.id", ondelete="CASCADE"), nullable=False
    )
    session_id: Mapped[str] = mapped_column(
        String, ForeignKey("academic_session.id", ondelete="CASCADE"), nullable=False
    )
    level: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=RegistrationStatus.REGISTERED.value
    )

    __table_args__ = (
        UniqueConstraint("student_id", "session_id", name="uq_registration_student_session"),
        enum_check("status", RegistrationStatus.values(), "registration_status_check"),
    )


class StudentDocument(CuidMixin, CreatedAtMixin, Base):
    """Document attached to a student (copied from the application at conversion)."""

    __tablename__ = "student_document"

    student_id: Mapped[str] = mapped_column(
        String, ForeignKey("student.id", ondelete="CASCADE"), nullable=False, index=True
    )
    doc_type: Mapped[str] = mapped_column(String, nullable=False)
    bucket: Mapped[str] = mapped_column(String, nullable=False)
    path: Mapped[str] = mapped_column(String, nullable=False)
    original_name: Mapped[str | None] = mapped_column(String, nullable=True)
    mime_type: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        enum_check("doc_type", DocumentType.values(), "student_document_type_check"),
    )
