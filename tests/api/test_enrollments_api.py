"""Enrollment and roster routes with overridden dependencies."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from campus.api.v1.dependencies import (
    get_current_principal,
    get_current_student,
    get_eligibility_gate,
    get_enrollment_service,
    get_offering_repo,
    get_publish_offering_use_case,
)
from campus.application.dtos.enrollment import (
    EligibilityDecision,
    EligibleStudent,
    EnrollmentResult,
    OfferingResult,
)
from campus.domain.enums import Unit
from campus.domain.exceptions import EnrollmentDeniedException, ResourceNotFoundException
from campus.domain.value_objects import (
    AcademicStaffPrincipal,
    AdminPrincipal,
    NonAcademicStaffPrincipal,
    StudentPrincipal,
)

STUDENT = StudentPrincipal("idn-1", "ada@campus.test", student_id="stu-1")
CREATED = EnrollmentResult(
    student_id="stu-1",
    course_offering_id="off-1",
    enrollment_id="enr-1",
    created_at=datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
)


@pytest.fixture
def service(app):
    mock = AsyncMock()
    mock.enroll = AsyncMock(return_value=CREATED)
    mock.withdraw = AsyncMock(return_value=None)
    mock.list_for_student = AsyncMock(return_value=[])
    app.dependency_overrides[get_enrollment_service] = lambda: mock
    app.dependency_overrides[get_current_student] = lambda: STUDENT
    return mock


@pytest.fixture
def roster(app):
    gate = AsyncMock()
    gate.eligible_students = AsyncMock(
        return_value=[
            EligibleStudent(
                student_id="stu-1",
                profile_id="idn-1",
                matric_no="SYK/NUR/25/0001",
                first_name="Ada",
                last_name="Obi",
                email="ada@campus.test",
            )
        ]
    )
    offerings = AsyncMock()
    offerings.is_staff_assigned = AsyncMock(return_value=False)
    app.dependency_overrides[get_eligibility_gate] = lambda: gate
    app.dependency_overrides[get_offering_repo] = lambda: offerings
    return gate, offerings


async def test_enroll_creates_with_201(client: AsyncClient, service) -> None:
    response = await client.post("/api/v1/student/enrollments/off-1")
    assert response.status_code == 201
    assert response.json()["enrollment_id"] == "enr-1"
    service.enroll.assert_awaited_once_with("stu-1", "off-1")


async def test_enroll_again_is_200(client: AsyncClient, service) -> None:
    service.enroll = AsyncMock(
        return_value=EnrollmentResult("stu-1", "off-1", already_enrolled=True)
    )
    response = await client.post("/api/v1/student/enrollments/off-1")
    assert response.status_code == 200
    assert response.json()["already_enrolled"] is True


async def test_denied_enrollment_carries_reason(client: AsyncClient, service) -> None:
    service.enroll = AsyncMock(
        side_effect=EnrollmentDeniedException("program not eligible", "stu-1", "off-1")
    )
    response = await client.post("/api/v1/student/enrollments/off-1")
    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "ENROLLMENT_DENIED"
    assert body["message"] == "program not eligible"


async def test_withdraw_is_204(client: AsyncClient, service) -> None:
    response = await client.delete("/api/v1/student/enrollments/off-1")
    assert response.status_code == 204
    service.withdraw.assert_awaited_once_with("stu-1", "off-1")


async def test_eligibility_preview(app, client: AsyncClient, service) -> None:
    gate = AsyncMock()
    gate.can_enroll = AsyncMock(return_value=EligibilityDecision.deny("not registered for session"))
    app.dependency_overrides[get_eligibility_gate] = lambda: gate
    response = await client.get("/api/v1/offerings/off-1/eligibility")
    assert response.status_code == 200
    assert response.json() == {
        "offering_id": "off-1",
        "outcome": "denied",
        "allowed": False,
        "reason": "not registered for session",
    }


async def test_exams_staff_view_eligible_students(app, client: AsyncClient, roster) -> None:
    gate, _ = roster
    app.dependency_overrides[get_current_principal] = lambda: NonAcademicStaffPrincipal(
        "idn-ex", "ex@campus.test", unit=Unit.EXAMS, staff_id="stf-ex"
    )
    response = await client.get("/api/v1/offerings/off-1/eligible-students")
    assert response.status_code == 200
    assert [r["matric_no"] for r in response.json()] == ["SYK/NUR/25/0001"]
    gate.eligible_students.assert_awaited_once_with("off-1")


async def test_bursary_staff_cannot_view_roster(app, client: AsyncClient, roster) -> None:
    app.dependency_overrides[get_current_principal] = lambda: NonAcademicStaffPrincipal(
        "idn-bu", "bu@campus.test", unit=Unit.BURSARY, staff_id="stf-bu"
    )
    response = await client.get("/api/v1/offerings/off-1/eligible-students")
    assert response.status_code == 403


async def test_academic_staff_need_assignment(app, client: AsyncClient, roster) -> None:
    _, offerings = roster
    app.dependency_overrides[get_current_principal] = lambda: AcademicStaffPrincipal(
        "idn-lec", "lec@campus.test", staff_id="stf-lec"
    )
    response = await client.get("/api/v1/offerings/off-1/eligible-students")
    assert response.status_code == 403
    offerings.is_staff_assigned.assert_awaited_once_with("off-1", "stf-lec")

    offerings.is_staff_assigned = AsyncMock(return_value=True)
    response = await client.get("/api/v1/offerings/off-1/eligible-students")
    assert response.status_code == 200


@pytest.fixture
def publish(app):
    use_case = AsyncMock()
    use_case.execute = AsyncMock(
        return_value=OfferingResult(
            id="off-1",
            course_code="NUR101",
            session_id="sess-2025",
            semester="first",
            program_id="prog-nur",
            level="100",
            is_published=True,
        )
    )
    app.dependency_overrides[get_publish_offering_use_case] = lambda: use_case
    return use_case


async def test_admin_publishes_offering(app, client: AsyncClient, publish) -> None:
    app.dependency_overrides[get_current_principal] = lambda: AdminPrincipal(
        "idn-root", "root@campus.test"
    )
    response = await client.patch("/api/v1/offerings/off-1/publish", json={})
    assert response.status_code == 200
    assert response.json()["is_published"] is True
    publish.execute.assert_awaited_once_with("off-1", True)


async def test_exams_staff_cannot_publish(app, client: AsyncClient, publish) -> None:
    app.dependency_overrides[get_current_principal] = lambda: NonAcademicStaffPrincipal(
        "idn-ex", "ex@campus.test", unit=Unit.EXAMS, staff_id="stf-ex"
    )
    response = await client.patch(
        "/api/v1/offerings/off-1/publish", json={"is_published": False}
    )
    assert response.status_code == 403
    assert response.json()["details"] == {"capability": "publish_offering"}
    publish.execute.assert_not_awaited()


async def test_publish_unknown_offering_is_404(app, client: AsyncClient, publish) -> None:
    app.dependency_overrides[get_current_principal] = lambda: AdminPrincipal(
        "idn-root", "root@campus.test"
    )
    publish.execute = AsyncMock(
        side_effect=ResourceNotFoundException("course_offering", "off-x")
    )
    response = await client.patch("/api/v1/offerings/off-x/publish", json={})
    assert response.status_code == 404
