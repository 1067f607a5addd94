"""Review and conversion of applications with mocked repositories and saga."""

from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from campus.application.dtos.application import (
    ApplicationResult,
    DocumentRef,
    ReviewAction,
)
from campus.application.dtos.provisioning import ProvisioningResult
from campus.application.use_cases.applications import (
    ConvertApplicationUseCase,
    ReviewApplicationUseCase,
)
from campus.domain.enums import (
    ApplicationStatus,
    DocumentType,
    Role,
    SponsorshipType,
)
from campus.domain.exceptions import (
    DependencyException,
    InvalidStateException,
    PolicyException,
    ResourceNotFoundException,
    ValidationException,
)

REQUIRED = [
    DocumentType.PASSPORT,
    DocumentType.SIGNATURE,
    DocumentType.ACADEMIC_RESULT,
    DocumentType.BIRTH_OR_AGE,
]


def _application(
    status: ApplicationStatus = ApplicationStatus.PENDING,
    sponsorship_type: SponsorshipType | None = None,
    converted_student_id: str | None = None,
) -> ApplicationResult:
    return ApplicationResult(
        id="app-1",
        email="ada@campus.test",
        first_name="Ada",
        last_name="Obi",
        program_id="prog-nur",
        session_id="sess-2025",
        status=status,
        sponsorship_type=sponsorship_type,
        guardian_first_name="Ngozi",
        converted_student_id=converted_student_id,
    )


def _documents(types: list[DocumentType]) -> list[DocumentRef]:
    return [
        DocumentRef(id=f"doc-{i}", doc_type=t, bucket="applications", path=f"app-1/{t.value}")
        for i, t in enumerate(types)
    ]


@pytest.fixture
def applications():
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=_application())
    repo.list_documents = AsyncMock(return_value=_documents(REQUIRED))

    async def mark_reviewed(application_id, status, **kwargs):
        return replace(
            _application(status=status),
            reviewed_by=kwargs["reviewer_id"],
            rejection_reason=kwargs["rejection_reason"],
        )

    repo.mark_reviewed = AsyncMock(side_effect=mark_reviewed)
    return repo


@pytest.fixture
def convert_mocks(applications):
    applications.get_by_id = AsyncMock(
        return_value=_application(status=ApplicationStatus.ACCEPTED)
    )
    store = AsyncMock()
    store.copy_application_documents = AsyncMock(return_value=4)
    store.link_application = AsyncMock(return_value=None)
    saga = AsyncMock()
    saga.provision = AsyncMock(
        return_value=ProvisioningResult(
            profile_id="idn-1", role_record_id="stu-1", code="SYK/NUR/25/0001"
        )
    )
    return ConvertApplicationUseCase(applications, store, saga), applications, store, saga


# --- review ----------------------------------------------------------------


async def test_accept_pending_application(applications) -> None:
    result = await ReviewApplicationUseCase(applications).execute(
        "app-1", ReviewAction.ACCEPT, "idn-admissions"
    )
    assert result.status is ApplicationStatus.ACCEPTED
    assert result.reviewed_by == "idn-admissions"
    args = applications.mark_reviewed.await_args
    assert args.args == ("app-1", ApplicationStatus.ACCEPTED)
    assert args.kwargs["rejection_reason"] is None


async def test_reject_requires_reason(applications) -> None:
    with pytest.raises(ValidationException):
        await ReviewApplicationUseCase(applications).execute(
            "app-1", ReviewAction.REJECT, "idn-admissions", reason="   "
        )
    applications.mark_reviewed.assert_not_awaited()


async def test_reject_stores_trimmed_reason(applications) -> None:
    result = await ReviewApplicationUseCase(applications).execute(
        "app-1", ReviewAction.REJECT, "idn-admissions", reason="  Incomplete results "
    )
    assert result.status is ApplicationStatus.REJECTED
    assert result.rejection_reason == "Incomplete results"


@pytest.mark.parametrize("status", [ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED])
async def test_terminal_application_cannot_be_reviewed(applications, status) -> None:
    applications.get_by_id = AsyncMock(return_value=_application(status=status))
    with pytest.raises(InvalidStateException):
        await ReviewApplicationUseCase(applications).execute(
            "app-1", ReviewAction.ACCEPT, "idn-admissions"
        )


async def test_concurrent_review_loses_cleanly(applications) -> None:
    applications.mark_reviewed = AsyncMock(return_value=None)
    with pytest.raises(InvalidStateException):
        await ReviewApplicationUseCase(applications).execute(
            "app-1", ReviewAction.ACCEPT, "idn-admissions"
        )


async def test_review_unknown_application(applications) -> None:
    applications.get_by_id = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await ReviewApplicationUseCase(applications).execute(
            "app-x", ReviewAction.ACCEPT, "idn-admissions"
        )


# --- conversion ------------------------------------------------------------


async def test_convert_provisions_invited_student_and_copies_documents(convert_mocks) -> None:
    use_case, _, store, saga = convert_mocks
    result = await use_case.execute("app-1")

    assert result.student_id == "stu-1"
    assert result.matric_no == "SYK/NUR/25/0001"
    assert result.warnings == ()
    request = saga.provision.await_args.args[0]
    assert request.role is Role.STUDENT
    assert request.invite is True
    assert request.student.program_id == "prog-nur"
    assert request.student.session_id == "sess-2025"
    assert request.student.guardian_first_name == "Ngozi"
    store.copy_application_documents.assert_awaited_once_with("app-1", "stu-1")
    store.link_application.assert_awaited_once_with("app-1", "stu-1")


async def test_convert_requires_accepted(convert_mocks) -> None:
    use_case, applications, _, saga = convert_mocks
    applications.get_by_id = AsyncMock(return_value=_application())
    with pytest.raises(InvalidStateException) as exc_info:
        await use_case.execute("app-1")
    assert exc_info.value.message == "Application must be accepted before conversion."
    saga.provision.assert_not_awaited()


async def test_convert_twice_is_rejected(convert_mocks) -> None:
    use_case, applications, _, saga = convert_mocks
    applications.get_by_id = AsyncMock(
        return_value=_application(
            status=ApplicationStatus.ACCEPTED, converted_student_id="stu-1"
        )
    )
    with pytest.raises(InvalidStateException) as exc_info:
        await use_case.execute("app-1")
    assert exc_info.value.message == "Application already converted."
    saga.provision.assert_not_awaited()


async def test_sponsored_without_letter_blocks_conversion(convert_mocks) -> None:
    use_case, applications, _, saga = convert_mocks
    applications.get_by_id = AsyncMock(
        return_value=_application(
            status=ApplicationStatus.ACCEPTED,
            sponsorship_type=SponsorshipType.GOVERNMENT,
        )
    )
    with pytest.raises(PolicyException) as exc_info:
        await use_case.execute("app-1")
    assert exc_info.value.reason == "Sponsorship letter is required for sponsored students."
    saga.provision.assert_not_awaited()


async def test_missing_document_blocks_conversion(convert_mocks) -> None:
    use_case, applications, _, saga = convert_mocks
    applications.list_documents = AsyncMock(return_value=_documents(REQUIRED[:3]))
    with pytest.raises(PolicyException):
        await use_case.execute("app-1")
    saga.provision.assert_not_awaited()


async def test_follow_up_failures_become_warnings(convert_mocks) -> None:
    use_case, _, store, saga = convert_mocks
    saga.provision = AsyncMock(
        return_value=ProvisioningResult(
            profile_id="idn-1",
            role_record_id="stu-1",
            code="SYK/NUR/25/0001",
            warnings=("Student created, but session registration failed.",),
        )
    )
    store.copy_application_documents = AsyncMock(
        side_effect=DependencyException("database", "gone")
    )
    store.link_application = AsyncMock(side_effect=DependencyException("database", "gone"))
    result = await use_case.execute("app-1")
    assert result.student_id == "stu-1"
    assert result.warnings == (
        "Student created, but session registration failed.",
        "Student created, but documents were not copied.",
        "Student created, but the application was not linked.",
    )
