"""Provisioning and document validation routes with overridden dependencies."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from campus.api.v1.dependencies import (
    get_current_principal,
    get_identity_id,
    get_provisioning_saga,
)
from campus.application.dtos.provisioning import ProvisioningResult
from campus.domain.enums import Role, Unit
from campus.domain.exceptions import DependencyException, EmailAlreadyRegisteredException
from campus.domain.value_objects import AdminPrincipal, NonAcademicStaffPrincipal

ADMISSIONS = NonAcademicStaffPrincipal(
    "idn-adm", "adm@campus.test", unit=Unit.ADMISSIONS, staff_id="stf-adm"
)
BURSARY = NonAcademicStaffPrincipal(
    "idn-bur", "bur@campus.test", unit=Unit.BURSARY, staff_id="stf-bur"
)
ROOT_ADMIN = AdminPrincipal("idn-root", "root@campus.test")
OTHER_ADMIN = AdminPrincipal("idn-other", "other@campus.test")

STUDENT_BODY = {
    "email": "Ada.Obi@Campus.Test",
    "first_name": "Ada",
    "last_name": "Obi",
    "program_id": "prog-nur",
    "session_id": "sess-2025",
}


@pytest.fixture
def saga(app):
    mock = AsyncMock()
    mock.provision = AsyncMock(
        return_value=ProvisioningResult(
            profile_id="idn-1",
            role_record_id="stu-1",
            code="SYK/NUR/25/0001",
            generated_credential="Temp-Pass-123",
        )
    )
    app.dependency_overrides[get_provisioning_saga] = lambda: mock
    return mock


def _as(app, principal) -> None:
    app.dependency_overrides[get_current_principal] = lambda: principal


async def test_create_student_requires_token(client: AsyncClient, saga) -> None:
    response = await client.post("/api/v1/students", json=STUDENT_BODY)
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    saga.provision.assert_not_awaited()


async def test_create_student_returns_code_and_one_time_password(
    app, client: AsyncClient, saga
) -> None:
    _as(app, ADMISSIONS)
    response = await client.post("/api/v1/students", json=STUDENT_BODY)
    assert response.status_code == 201
    data = response.json()
    assert data["code"] == "SYK/NUR/25/0001"
    assert data["role_record_id"] == "stu-1"
    assert data["temporary_password"] == "Temp-Pass-123"
    request = saga.provision.await_args.args[0]
    assert request.role is Role.STUDENT
    assert request.email == "ada.obi@campus.test"
    assert request.student.program_id == "prog-nur"


async def test_bursary_staff_cannot_create_students(app, client: AsyncClient, saga) -> None:
    _as(app, BURSARY)
    response = await client.post("/api/v1/students", json=STUDENT_BODY)
    assert response.status_code == 403
    assert response.json()["details"] == {"capability": "provision_student"}
    saga.provision.assert_not_awaited()


async def test_missing_profile_is_forbidden(app, client: AsyncClient, saga) -> None:
    _as(app, None)
    response = await client.post("/api/v1/students", json=STUDENT_BODY)
    assert response.status_code == 403


async def test_invalid_email_is_422(app, client: AsyncClient, saga) -> None:
    _as(app, ADMISSIONS)
    response = await client.post(
        "/api/v1/students", json={**STUDENT_BODY, "email": "not-an-email"}
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_duplicate_email_is_409(app, client: AsyncClient, saga) -> None:
    _as(app, ADMISSIONS)
    saga.provision = AsyncMock(
        side_effect=EmailAlreadyRegisteredException("ada.obi@campus.test")
    )
    response = await client.post("/api/v1/students", json=STUDENT_BODY)
    assert response.status_code == 409
    assert response.json()["error"] == "CONFLICT"


async def test_dependency_failure_is_503_without_reason(
    app, client: AsyncClient, saga
) -> None:
    _as(app, ADMISSIONS)
    saga.provision = AsyncMock(
        side_effect=DependencyException("identity_store", "connect to 10.0.0.5 refused")
    )
    response = await client.post("/api/v1/students", json=STUDENT_BODY)
    assert response.status_code == 503
    body = response.json()
    assert body["details"] == {"dependency": "identity_store"}
    assert "10.0.0.5" not in response.text


async def test_only_admins_create_staff(app, client: AsyncClient, saga) -> None:
    body = {
        "email": "lec@campus.test",
        "first_name": "Chidi",
        "last_name": "Eze",
        "role": "academic_staff",
        "department_id": "dept-mls",
    }
    _as(app, ADMISSIONS)
    assert (await client.post("/api/v1/staff", json=body)).status_code == 403

    _as(app, ROOT_ADMIN)
    response = await client.post("/api/v1/staff", json=body)
    assert response.status_code == 201
    request = saga.provision.await_args.args[0]
    assert request.role is Role.ACADEMIC_STAFF
    assert request.staff.department_id == "dept-mls"


async def test_staff_role_must_be_a_staff_role(app, client: AsyncClient, saga) -> None:
    _as(app, ROOT_ADMIN)
    response = await client.post(
        "/api/v1/staff",
        json={"email": "x@campus.test", "first_name": "X", "last_name": "Y", "role": "admin"},
    )
    assert response.status_code == 422


async def test_admin_invite_requires_allowlist(app, client: AsyncClient, saga) -> None:
    body = {"email": "dean@campus.test", "first_name": "Dean", "last_name": "Admin"}
    _as(app, OTHER_ADMIN)
    assert (await client.post("/api/v1/admins/invite", json=body)).status_code == 403

    saga.provision = AsyncMock(
        return_value=ProvisioningResult(profile_id="idn-9", role_record_id=None, code=None)
    )
    _as(app, ROOT_ADMIN)
    response = await client.post("/api/v1/admins/invite", json=body)
    assert response.status_code == 201
    assert response.json()["code"] is None
    request = saga.provision.await_args.args[0]
    assert request.role is Role.ADMIN
    assert request.invite is True


async def test_document_validation_reports_first_failing_rule(
    app, client: AsyncClient
) -> None:
    app.dependency_overrides[get_identity_id] = lambda: "idn-1"
    response = await client.post(
        "/api/v1/documents/validate",
        json={"doc_types": ["passport", "signature", "academic_result"], "sponsored": False},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "POLICY_VIOLATION"
    assert body["message"] == "Missing required document: birth_or_age"


async def test_document_validation_ok(app, client: AsyncClient) -> None:
    app.dependency_overrides[get_identity_id] = lambda: "idn-1"
    response = await client.post(
        "/api/v1/documents/validate",
        json={
            "doc_types": ["passport", "signature", "academic_result", "birth_or_age"],
            "sponsored": False,
        },
    )
    assert response.status_code == 200
    assert response.json() == {"ok": True}
