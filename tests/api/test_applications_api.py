"""Application review and conversion routes with overridden dependencies."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from campus.api.v1.dependencies import (
    get_convert_application_use_case,
    get_current_principal,
    get_review_application_use_case,
)
from campus.application.dtos.application import (
    ApplicationResult,
    ConversionResult,
    ReviewAction,
)
from campus.domain.enums import ApplicationStatus, Unit
from campus.domain.exceptions import InvalidStateException, PolicyException
from campus.domain.value_objects import NonAcademicStaffPrincipal, StudentPrincipal

ADMISSIONS = NonAcademicStaffPrincipal(
    "idn-adm", "adm@campus.test", unit=Unit.ADMISSIONS, staff_id="stf-adm"
)


@pytest.fixture
def review(app):
    use_case = AsyncMock()
    use_case.execute = AsyncMock(
        return_value=ApplicationResult(
            id="app-1",
            email="ada@campus.test",
            first_name="Ada",
            last_name="Obi",
            program_id="prog-nur",
            session_id="sess-2025",
            status=ApplicationStatus.ACCEPTED,
            sponsorship_type=None,
            reviewed_by="idn-adm",
        )
    )
    app.dependency_overrides[get_review_application_use_case] = lambda: use_case
    app.dependency_overrides[get_current_principal] = lambda: ADMISSIONS
    return use_case


@pytest.fixture
def convert(app):
    use_case = AsyncMock()
    use_case.execute = AsyncMock(
        return_value=ConversionResult(
            application_id="app-1",
            student_id="stu-1",
            profile_id="idn-1",
            matric_no="SYK/NUR/25/0001",
        )
    )
    app.dependency_overrides[get_convert_application_use_case] = lambda: use_case
    app.dependency_overrides[get_current_principal] = lambda: ADMISSIONS
    return use_case


async def test_accept_application(client: AsyncClient, review) -> None:
    response = await client.patch(
        "/api/v1/applications/app-1/review", json={"action": "accept"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "accepted"
    review.execute.assert_awaited_once_with(
        "app-1", ReviewAction.ACCEPT, "idn-adm", reason=None
    )


async def test_reject_without_reason_is_422(client: AsyncClient, review) -> None:
    response = await client.patch(
        "/api/v1/applications/app-1/review", json={"action": "reject"}
    )
    assert response.status_code == 422
    review.execute.assert_not_awaited()


async def test_review_of_terminal_application_is_400(client: AsyncClient, review) -> None:
    review.execute = AsyncMock(
        side_effect=InvalidStateException(
            "Application already rejected", "application", "rejected"
        )
    )
    response = await client.patch(
        "/api/v1/applications/app-1/review", json={"action": "accept"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_STATE"


async def test_students_cannot_review(app, client: AsyncClient, review) -> None:
    app.dependency_overrides[get_current_principal] = lambda: StudentPrincipal(
        "idn-s", "s@campus.test", student_id="stu-9"
    )
    response = await client.patch(
        "/api/v1/applications/app-1/review", json={"action": "accept"}
    )
    assert response.status_code == 403


async def test_convert_returns_matric_number(client: AsyncClient, convert) -> None:
    response = await client.post("/api/v1/applications/app-1/convert")
    assert response.status_code == 201
    assert response.json() == {
        "application_id": "app-1",
        "student_id": "stu-1",
        "profile_id": "idn-1",
        "matric_no": "SYK/NUR/25/0001",
        "warnings": [],
    }


async def test_convert_blocked_by_document_policy(client: AsyncClient, convert) -> None:
    convert.execute = AsyncMock(
        side_effect=PolicyException(
            "Sponsorship letter is required for sponsored students.", "document_set"
        )
    )
    response = await client.post("/api/v1/applications/app-1/convert")
    assert response.status_code == 422
    assert (
        response.json()["message"]
        == "Sponsorship letter is required for sponsored students."
    )
