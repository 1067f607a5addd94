"""Reconciliation queries: profiles whose saga never created a RoleRecord."""

from datetime import datetime

from sqlalchemy import and_, exists, or_, select

from campus.application.dtos.reconciliation import OrphanedProfile
from campus.domain.enums import Role
from campus.infrastructure.persistence.models import Profile, Staff, Student
from campus.infrastructure.persistence.repositories.base import TransactionalStore
from campus.shared.utils.datetime import ensure_utc

_STAFF_ROLES = (Role.ACADEMIC_STAFF.value, Role.NON_ACADEMIC_STAFF.value)


class SqlReconciliationRepository(TransactionalStore):
    async def find_orphaned_profiles(self, created_before: datetime) -> list[OrphanedProfile]:
        has_student = exists().where(Student.profile_id == Profile.id)
        has_staff = exists().where(Staff.profile_id == Profile.id)
        stmt = (
            select(Profile.id, Profile.email, Profile.role, Profile.created_at)
            .where(
                Profile.created_at < created_before,
                or_(
                    and_(Profile.role == Role.STUDENT.value, ~has_student),
                    and_(Profile.role.in_(_STAFF_ROLES), ~has_staff),
                ),
            )
            .order_by(Profile.created_at)
        )
        async with self.transaction() as session:
            result = await session.execute(stmt)
            rows = result.all()
        return [
            OrphanedProfile(
                profile_id=row.id,
                email=row.email,
                role=Role(row.role),
                created_at=ensure_utc(row.created_at),
            )
            for row in rows
        ]
