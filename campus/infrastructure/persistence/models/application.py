"""Application (intake request) and application document ORM models."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus.domain.enums import ApplicationStatus, DocumentType, SponsorshipType
from campus.infrastructure.persistence.database import Base
from campus.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    EntityModel,
    enum_check,
)


class Application(EntityModel, Base):
    """Application. Table: application. Immutable once accepted/rejected except audit fields."""

    __tablename__ = "application"

    first_name: Mapped[str] = mapped_column(String, nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    gender: Mapped[str | None] = mapped_column(String, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    state_of_origin: Mapped[str | None] = mapped_column(String, nullable=True)
    lga_of_origin: Mapped[str | None] = mapped_column(String, nullable=True)
    nin: Mapped[str | None] = mapped_column(String, nullable=True)
    religion: Mapped[str | None] = mapped_column(String, nullable=True)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    guardian_first_name: Mapped[str | None] = mapped_column(String, nullable=True)
    guardian_last_name: Mapped[str | None] = mapped_column(String, nullable=True)
    guardian_phone: Mapped[str | None] = mapped_column(String, nullable=True)
    guardian_status: Mapped[str | None] = mapped_column(String, nullable=True)
    program_id: Mapped[str] = mapped_column(
        String, ForeignKey("program.id"), nullable=False
    )
    session_id: Mapped[str] = mapped_column(
        String, ForeignKey("academic_session.id"), nullable=False
    )
    sponsorship_type: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=ApplicationStatus.PENDING.value, index=True
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[str | None] = mapped_column(String, nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    converted_student_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("student.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        enum_check("status", ApplicationStatus.values(), "application_status_check"),
        enum_check(
            "sponsorship_type", SponsorshipType.values(), "application_sponsorship_check"
        ),
    )


class ApplicationDocument(CuidMixin, CreatedAtMixin, Base):
    """Document uploaded with an application (storage reference + type tag)."""

    __tablename__ = "application_document"

    application_id: Mapped[str] = mapped_column(
        String, ForeignKey("application.id", ondelete="CASCADE"), nullable=False, index=True
    )
    doc_type: Mapped[str] = mapped_column(String, nullable=False)
    bucket: Mapped[str] = mapped_column(String, nullable=False)
    path: Mapped[str] = mapped_column(String, nullable=False)
    original_name: Mapped[str | None] = mapped_column(String, nullable=True)
    mime_type: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        enum_check("doc_type", DocumentType.values(), "application_document_type_check"),
    )
