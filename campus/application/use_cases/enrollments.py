"""Enrollment: eligibility gate, then insert; withdraw; list own enrollments."""

from __future__ import annotations

import logging

from campus.application.dtos.enrollment import (
    EligibilityOutcome,
    EnrolledOffering,
    EnrollmentResult,
)
from campus.application.interfaces.repositories import IEnrollmentRepository
from campus.application.services.eligibility_gate import EligibilityGate
from campus.domain.exceptions import EnrollmentDeniedException, ResourceNotFoundException

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Writes enrollments only after the gate allows them."""

    def __init__(self, gate: EligibilityGate, enrollments: IEnrollmentRepository) -> None:
        self.gate = gate
        self.enrollments = enrollments

    async def enroll(self, student_id: str, offering_id: str) -> EnrollmentResult:
        """Enroll the student; existing enrollment is an idempotent success.

        Raises:
            EnrollmentDeniedException: If the gate denies, with its reason.
        """
        decision = await self.gate.can_enroll(student_id, offering_id)
        if decision.outcome is EligibilityOutcome.DENIED:
            raise EnrollmentDeniedException(
                decision.reason or "not eligible", student_id, offering_id
            )
        if decision.outcome is EligibilityOutcome.ALREADY_ENROLLED:
            return EnrollmentResult(student_id, offering_id, already_enrolled=True)

        created = await self.enrollments.create(student_id, offering_id)
        if created is None:
            # Unique constraint won a race with a concurrent request.
            return EnrollmentResult(student_id, offering_id, already_enrolled=True)
        logger.info("Enrolled student %s in offering %s", student_id, offering_id)
        return created

    async def withdraw(self, student_id: str, offering_id: str) -> None:
        if not await self.enrollments.delete(student_id, offering_id):
            raise ResourceNotFoundException("enrollment", f"{student_id}:{offering_id}")
        logger.info("Student %s withdrew from offering %s", student_id, offering_id)

    async def list_for_student(
        self, student_id: str, session_id: str | None = None
    ) -> list[EnrolledOffering]:
        return await self.enrollments.list_for_student(student_id, session_id)
