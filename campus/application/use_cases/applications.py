"""Application intake: admissions review and conversion into a student."""

from __future__ import annotations

import logging

from campus.application.dtos.application import (
    ApplicationResult,
    ConversionResult,
    ReviewAction,
)
from campus.application.dtos.provisioning import ProvisioningRequest, StudentDetails
from campus.application.interfaces.repositories import (
    IApplicationRepository,
    IProvisioningStore,
)
from campus.application.services.document_set_policy import validate_document_set
from campus.application.services.provisioning_saga import ProvisioningSaga
from campus.domain.enums import ApplicationStatus, Role
from campus.domain.exceptions import (
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from campus.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class ReviewApplicationUseCase:
    """Accept or reject a pending application. Terminal applications are immutable."""

    def __init__(self, applications: IApplicationRepository) -> None:
        self.applications = applications

    async def execute(
        self,
        application_id: str,
        action: ReviewAction,
        reviewer_id: str,
        reason: str | None = None,
    ) -> ApplicationResult:
        application = await self.applications.get_by_id(application_id)
        if application is None:
            raise ResourceNotFoundException("application", application_id)
        if application.status is not ApplicationStatus.PENDING:
            raise InvalidStateException(
                f"Application already {application.status.value}",
                "application",
                application.status.value,
            )

        rejection_reason: str | None = None
        if action is ReviewAction.ACCEPT:
            status = ApplicationStatus.ACCEPTED
        else:
            rejection_reason = (reason or "").strip()
            if not rejection_reason:
                raise ValidationException(
                    "A reason is required to reject an application", field="reason"
                )
            status = ApplicationStatus.REJECTED

        updated = await self.applications.mark_reviewed(
            application_id,
            status,
            reviewer_id=reviewer_id,
            reviewed_at=utc_now(),
            rejection_reason=rejection_reason,
        )
        if updated is None:
            # Lost a race with another reviewer.
            raise InvalidStateException(
                "Application was reviewed concurrently", "application", "reviewed"
            )
        logger.info(
            "Application %s %s by %s", application_id, status.value, reviewer_id
        )
        return updated


class ConvertApplicationUseCase:
    """Turn an accepted application into a student via the provisioning saga.

    The document set policy blocks conversion. After the saga commits, the
    documents are copied and the application is linked to the student; those
    follow-ups report warnings instead of undoing the saga.
    """

    def __init__(
        self,
        applications: IApplicationRepository,
        store: IProvisioningStore,
        saga: ProvisioningSaga,
    ) -> None:
        self.applications = applications
        self.store = store
        self.saga = saga

    async def execute(self, application_id: str) -> ConversionResult:
        application = await self.applications.get_by_id(application_id)
        if application is None:
            raise ResourceNotFoundException("application", application_id)
        if application.status is not ApplicationStatus.ACCEPTED:
            raise InvalidStateException(
                "Application must be accepted before conversion.",
                "application",
                application.status.value,
            )
        if application.converted_student_id:
            raise InvalidStateException(
                "Application already converted.", "application", "converted"
            )

        documents = await self.applications.list_documents(application_id)
        validate_document_set(
            [d.doc_type for d in documents], sponsored=application.is_sponsored
        )

        result = await self.saga.provision(self._request_from(application))
        student_id = result.role_record_id
        assert student_id is not None and result.code is not None

        warnings = list(result.warnings)
        try:
            copied = await self.store.copy_application_documents(
                application_id, student_id
            )
            logger.info("Copied %d documents to student %s", copied, student_id)
        except Exception:
            logger.exception("Document copy failed for application %s", application_id)
            warnings.append("Student created, but documents were not copied.")
        try:
            await self.store.link_application(application_id, student_id)
        except Exception:
            logger.exception("Linking application %s failed", application_id)
            warnings.append("Student created, but the application was not linked.")

        return ConversionResult(
            application_id=application_id,
            student_id=student_id,
            profile_id=result.profile_id,
            matric_no=result.code,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _request_from(application: ApplicationResult) -> ProvisioningRequest:
        return ProvisioningRequest(
            role=Role.STUDENT,
            email=application.email,
            first_name=application.first_name,
            last_name=application.last_name,
            middle_name=application.middle_name,
            phone=application.phone,
            gender=application.gender,
            date_of_birth=application.date_of_birth,
            state_of_origin=application.state_of_origin,
            lga_of_origin=application.lga_of_origin,
            nin=application.nin,
            religion=application.religion,
            address=application.address,
            invite=True,
            student=StudentDetails(
                program_id=application.program_id,
                session_id=application.session_id,
                guardian_first_name=application.guardian_first_name,
                guardian_last_name=application.guardian_last_name,
                guardian_phone=application.guardian_phone,
                guardian_status=application.guardian_status,
            ),
        )
