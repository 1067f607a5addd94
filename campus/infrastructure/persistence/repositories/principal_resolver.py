"""Principal resolver: identity id -> Principal via two explicit lookups.

First the profile (role), then the role record (student id, or staff id
and unit). The unit is never inferred from the role.
"""

from typing import assert_never

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus.domain.enums import Role, Unit
from campus.domain.value_objects import (
    AcademicStaffPrincipal,
    AdminPrincipal,
    NonAcademicStaffPrincipal,
    Principal,
    StudentPrincipal,
)
from campus.infrastructure.persistence.models import Profile, Staff, Student
from campus.infrastructure.persistence.repositories.base import translate_store_errors


class PrincipalResolver:
    """IPrincipalResolver over the request-scoped session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def resolve(self, identity_id: str) -> Principal | None:
        async with translate_store_errors():
            result = await self.db.execute(
                select(Profile.role, Profile.email).where(Profile.id == identity_id)
            )
            row = result.one_or_none()
            if row is None:
                return None
            role, email = Role(row.role), row.email

            if role is Role.ADMIN:
                return AdminPrincipal(identity_id, email)
            if role is Role.STUDENT:
                student_id = (
                    await self.db.execute(
                        select(Student.id).where(Student.profile_id == identity_id)
                    )
                ).scalar_one_or_none()
                return StudentPrincipal(identity_id, email, student_id)

            staff = (
                await self.db.execute(
                    select(Staff.id, Staff.unit).where(Staff.profile_id == identity_id)
                )
            ).one_or_none()
            staff_id = staff.id if staff else None
            if role is Role.ACADEMIC_STAFF:
                return AcademicStaffPrincipal(identity_id, email, staff_id)
            if role is Role.NON_ACADEMIC_STAFF:
                unit = Unit(staff.unit) if staff and staff.unit else None
                return NonAcademicStaffPrincipal(identity_id, email, unit, staff_id)
            assert_never(role)
