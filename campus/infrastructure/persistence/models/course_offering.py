"""Course offering, its program and staff links, and enrollment ORM models."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from campus.infrastructure.persistence.database import Base
from campus.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    EntityModel,
)


class CourseOffering(EntityModel, Base):
    """Scheduled instance of a course. Table: course_offering.

    program_id is the optional direct scope; course_offering_program adds
    further programs.
    """

    __tablename__ = "course_offering"

    course_code: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str | None] = mapped_column(String, nullable=True)
    session_id: Mapped[str] = mapped_column(
        String, ForeignKey("academic_session.id"), nullable=False, index=True
    )
    semester: Mapped[str] = mapped_column(String, nullable=False)
    program_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("program.id", ondelete="SET NULL"), nullable=True
    )
    level: Mapped[str | None] = mapped_column(String, nullable=True)
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )


class CourseOfferingProgram(CuidMixin, Base):
    """Many-to-many offering-program. Table: course_offering_program."""

    __tablename__ = "course_offering_program"

    course_offering_id: Mapped[str] = mapped_column(
        String, ForeignKey("course_offering.id", ondelete="CASCADE"), nullable=False
    )
    program_id: Mapped[str] = mapped_column(
        String, ForeignKey("program.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("course_offering_id", "program_id", name="uq_offering_program"),
    )


class CourseOfferingStaff(CuidMixin, CreatedAtMixin, Base):
    """Academic staff assigned to an offering. Table: course_offering_staff."""

    __tablename__ = "course_offering_staff"

    course_offering_id: Mapped[str] = mapped_column(
        String, ForeignKey("course_offering.id", ondelete="CASCADE"), nullable=False
    )
    staff_id: Mapped[str] = mapped_column(
        String, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("course_offering_id", "staff_id", name="uq_offering_staff"),
    )


class Enrollment(CuidMixin, CreatedAtMixin, Base):
    """Student enrolled in an offering. Table: enrollment. Unique per pair."""

    __tablename__ = "enrollment"

    student_id: Mapped[str] = mapped_column(
        String, ForeignKey("student.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_offering_id: Mapped[str] = mapped_column(
        String, ForeignKey("course_offering.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("student_id", "course_offering_id", name="uq_enrollment_pair"),
    )
