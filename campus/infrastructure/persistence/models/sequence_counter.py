"""SequenceCounter ORM model: one row per (namespace, year_suffix).

namespace carries the code kind, e.g. ``staff:MLS`` or ``matric:NUR``.
"""

from sqlalchemy import BigInteger, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from campus.infrastructure.persistence.database import Base
from campus.infrastructure.persistence.models.mixins import TimestampMixin


class SequenceCounter(TimestampMixin, Base):
    """Counter. Table: sequence_counter. value is the last value handed out.

    Only ever written by the atomic upsert in SqlSequenceAllocator.
    """

    __tablename__ = "sequence_counter"

    namespace: Mapped[str] = mapped_column(String, primary_key=True)
    year_suffix: Mapped[str] = mapped_column(String(2), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (CheckConstraint("value >= 1", name="sequence_counter_value_check"),)
