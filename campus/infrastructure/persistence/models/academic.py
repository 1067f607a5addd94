"""Academic structure ORM models: department, program, academic session."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from campus.infrastructure.persistence.database import Base
from campus.infrastructure.persistence.models.mixins import EntityModel


class Department(EntityModel, Base):
    """Department. Table: department. Code doubles as the staff sequence namespace."""

    __tablename__ = "department"

    code: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)


class Program(EntityModel, Base):
    """Program of study. Table: program. Code doubles as the matric sequence namespace."""

    __tablename__ = "program"

    code: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True
    )


class AcademicSession(EntityModel, Base):
    """Academic session (e.g. 2024/2025). Table: academic_session."""

    __tablename__ = "academic_session"

    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    is_current: Mapped[bool] = mapped_column(default=False, nullable=False)
