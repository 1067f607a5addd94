"""Staff RoleRecord ORM model."""

from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from campus.domain.enums import RecordStatus, Unit
from campus.infrastructure.persistence.database import Base
from campus.infrastructure.persistence.models.mixins import EntityModel, enum_check


class Staff(EntityModel, Base):
    """Staff. Table: staff. One per profile; staff_no assigned once at creation.

    unit is only meaningful for non-academic staff and is the second lookup
    the capability guard performs.
    """

    __tablename__ = "staff"

    profile_id: Mapped[str] = mapped_column(
        String, ForeignKey("profile.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    staff_no: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True
    )
    designation: Mapped[str | None] = mapped_column(String, nullable=True)
    specialization: Mapped[str | None] = mapped_column(String, nullable=True)
    unit: Mapped[str | None] = mapped_column(String, nullable=True)
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=RecordStatus.ACTIVE.value
    )

    __table_args__ = (
        enum_check("status", RecordStatus.values(), "staff_status_check"),
        enum_check("unit", Unit.values(), "staff_unit_check"),
    )
