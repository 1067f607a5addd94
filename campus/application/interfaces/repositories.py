"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain types only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from campus.domain.enums import ApplicationStatus

if TYPE_CHECKING:
    from campus.application.dtos.application import ApplicationResult, DocumentRef
    from campus.application.dtos.enrollment import (
        EligibleStudent,
        EnrolledOffering,
        EnrollmentResult,
        OfferingResult,
        StudentRecordResult,
    )
    from campus.application.dtos.provisioning import (
        ProfileCreate,
        StaffDetails,
        StudentDetails,
    )
    from campus.application.dtos.reconciliation import OrphanedProfile
    from campus.domain.value_objects import Principal, SequenceKey


class IProvisioningStore(Protocol):
    """Relational writes used by the provisioning saga.

    Every method runs in its own short transaction and is committed when it
    returns, so a later saga step failing does not roll back an earlier one;
    compensation is explicit.
    """

    async def email_exists(self, email: str) -> bool:
        """Return True if a profile is already bound to email."""

    async def create_profile(self, data: ProfileCreate) -> str:
        """Insert profile; raise ConflictException on duplicate email or id."""

    async def delete_profile(self, profile_id: str) -> None:
        """Delete profile (idempotent)."""

    async def get_program_code(self, program_id: str) -> str | None:
        """Return program code, or None if the program does not exist."""

    async def get_department_code(self, department_id: str) -> str | None:
        """Return department code, or None if the department does not exist."""

    async def create_student(
        self, profile_id: str, matric_no: str, details: StudentDetails
    ) -> str:
        """Insert student RoleRecord; return its id."""

    async def create_staff(
        self, profile_id: str, staff_no: str, details: StaffDetails
    ) -> str:
        """Insert staff RoleRecord; return its id."""

    async def upsert_registration(
        self, student_id: str, session_id: str, level: str | None
    ) -> None:
        """Ensure a 'registered' registration exists for (student, session)."""

    async def copy_application_documents(
        self, application_id: str, student_id: str
    ) -> int:
        """Copy application_document rows to student_document; return count."""

    async def link_application(self, application_id: str, student_id: str) -> None:
        """Record the converted student on the application."""


class ISequenceAllocator(Protocol):
    """Atomic per-key counter."""

    async def next(self, key: SequenceKey) -> int:
        """Return the next value for key (1 on first use); never reused."""


class IApplicationRepository(Protocol):
    """Application reads and review updates."""

    async def get_by_id(self, application_id: str) -> ApplicationResult | None:
        """Return application by id."""

    async def list_documents(self, application_id: str) -> list[DocumentRef]:
        """Return documents uploaded with the application."""

    async def mark_reviewed(
        self,
        application_id: str,
        status: ApplicationStatus,
        reviewer_id: str,
        reviewed_at: datetime,
        rejection_reason: str | None = None,
    ) -> ApplicationResult | None:
        """Move a pending application to a terminal status.

        Returns None if the application was no longer pending.
        """


class IOfferingRepository(Protocol):
    """Reads used by the eligibility gate and roster, plus the publish flag."""

    async def get_offering(self, offering_id: str) -> OfferingResult | None:
        """Return offering by id."""

    async def get_student(self, student_id: str) -> StudentRecordResult | None:
        """Return student RoleRecord by id."""

    async def get_student_by_profile(self, profile_id: str) -> StudentRecordResult | None:
        """Return student RoleRecord for a profile."""

    async def is_registered(self, student_id: str, session_id: str) -> bool:
        """True if the student has a 'registered' registration for the session."""

    async def get_linked_program_ids(self, offering_id: str) -> set[str]:
        """Programs linked to the offering via course_offering_program."""

    async def is_enrolled(self, student_id: str, offering_id: str) -> bool:
        """True if an enrollment exists for the pair."""

    async def list_eligible_students(
        self, offering: OfferingResult, program_ids: set[str]
    ) -> list[EligibleStudent]:
        """Active students registered for the offering's session, in program_ids,
        matching the offering level when set, not yet enrolled."""

    async def is_staff_assigned(self, offering_id: str, staff_id: str) -> bool:
        """True if staff is assigned to the offering."""

    async def set_published(
        self, offering_id: str, published: bool
    ) -> OfferingResult | None:
        """Set the publish flag; None if the offering does not exist."""


class IEnrollmentRepository(Protocol):
    """Enrollment writes and student self-service reads."""

    async def create(self, student_id: str, offering_id: str) -> EnrollmentResult | None:
        """Insert enrollment; return None if the pair already exists."""

    async def delete(self, student_id: str, offering_id: str) -> bool:
        """Delete enrollment; return False if there was none."""

    async def list_for_student(
        self, student_id: str, session_id: str | None = None
    ) -> list[EnrolledOffering]:
        """Return the student's enrollments, newest first."""


class IPrincipalResolver(Protocol):
    """Resolves an identity id to a Principal."""

    async def resolve(self, identity_id: str) -> Principal | None:
        """Return the principal, or None when no profile is bound to the identity."""


class IReconciliationRepository(Protocol):
    async def find_orphaned_profiles(self, created_before: datetime) -> list[OrphanedProfile]:
        """Profiles with a student/staff role, no RoleRecord, created before the cutoff."""
