"""Eligibility gate: may a student enroll in an offering.

Read-only. Checks short-circuit in order: published offering, active student
record, registration for the offering's session, program eligibility (direct
or via the many-to-many link), level scope, then existing enrollment
(idempotent success). The roster query applies the same rules.
"""

from campus.application.dtos.enrollment import (
    EligibilityDecision,
    EligibleStudent,
    OfferingResult,
)
from campus.application.interfaces.repositories import IOfferingRepository
from campus.domain.enums import RecordStatus
from campus.domain.exceptions import ResourceNotFoundException

REASON_NOT_PUBLISHED = "offering not published"
REASON_INACTIVE_STUDENT = "student record not active"
REASON_NOT_REGISTERED = "not registered for session"
REASON_PROGRAM_INELIGIBLE = "program not eligible"
REASON_LEVEL_MISMATCH = "level not eligible"


class EligibilityGate:
    """CanEnroll and the roster-side eligible population."""

    def __init__(self, offerings: IOfferingRepository) -> None:
        self.offerings = offerings

    async def _program_ids(self, offering: OfferingResult) -> set[str]:
        program_ids = set(await self.offerings.get_linked_program_ids(offering.id))
        if offering.program_id:
            program_ids.add(offering.program_id)
        return program_ids

    async def can_enroll(self, student_id: str, offering_id: str) -> EligibilityDecision:
        """Return allowed, denied(reason) or already_enrolled. Never writes."""
        offering = await self.offerings.get_offering(offering_id)
        if offering is None or not offering.is_published:
            return EligibilityDecision.deny(REASON_NOT_PUBLISHED)

        student = await self.offerings.get_student(student_id)
        if student is None:
            raise ResourceNotFoundException("student", student_id)

        if student.status != RecordStatus.ACTIVE.value:
            return EligibilityDecision.deny(REASON_INACTIVE_STUDENT)

        if not await self.offerings.is_registered(student_id, offering.session_id):
            return EligibilityDecision.deny(REASON_NOT_REGISTERED)

        if student.program_id not in await self._program_ids(offering):
            return EligibilityDecision.deny(REASON_PROGRAM_INELIGIBLE)

        if offering.level and student.level != offering.level:
            return EligibilityDecision.deny(REASON_LEVEL_MISMATCH)

        if await self.offerings.is_enrolled(student_id, offering_id):
            return EligibilityDecision.already_enrolled()
        return EligibilityDecision.allow()

    async def eligible_students(self, offering_id: str) -> list[EligibleStudent]:
        """Students who could enroll now and have not yet.

        An unpublished offering has an empty eligible population.
        """
        offering = await self.offerings.get_offering(offering_id)
        if offering is None:
            raise ResourceNotFoundException("course_offering", offering_id)
        if not offering.is_published:
            return []
        program_ids = await self._program_ids(offering)
        if not program_ids:
            return []
        return await self.offerings.list_eligible_students(offering, program_ids)
