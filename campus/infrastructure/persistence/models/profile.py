"""Profile ORM model: application-level mirror of an identity-store principal."""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from campus.domain.enums import OnboardingStatus, Role
from campus.infrastructure.persistence.database import Base
from campus.infrastructure.persistence.models.mixins import TimestampMixin, enum_check


class Profile(TimestampMixin, Base):
    """Profile. Table: profile. id is the identity-store user id; unique email.

    The unique constraint on email is the source of truth for duplicate
    provisioning; the saga's pre-check is only a fast path.
    """

    __tablename__ = "profile"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    gender: Mapped[str | None] = mapped_column(String, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    state_of_origin: Mapped[str | None] = mapped_column(String, nullable=True)
    lga_of_origin: Mapped[str | None] = mapped_column(String, nullable=True)
    nin: Mapped[str | None] = mapped_column(String, nullable=True)
    religion: Mapped[str | None] = mapped_column(String, nullable=True)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(String, nullable=False, index=True)
    onboarding_status: Mapped[str] = mapped_column(
        String, nullable=False, default=OnboardingStatus.PENDING.value
    )

    __table_args__ = (
        enum_check("role", Role.values(), "profile_role_check"),
        enum_check(
            "onboarding_status", OnboardingStatus.values(), "profile_onboarding_check"
        ),
    )
