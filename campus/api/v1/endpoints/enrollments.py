"""Eligibility and enrollment API.

Student self-service routes live under /student/enrollments; exams staff and
assigned academic staff use the offering-scoped routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from campus.api.v1.dependencies import (
    get_current_student,
    get_eligibility_gate,
    get_enrollment_service,
    require_offering_capability,
)
from campus.application.dtos.enrollment import EnrollmentResult
from campus.application.services.capability_guard import Capability
from campus.application.services.eligibility_gate import EligibilityGate
from campus.application.use_cases.enrollments import EnrollmentService
from campus.core.limiter import limit_writes
from campus.domain.value_objects import Principal, StudentPrincipal
from campus.schemas.enrollment import (
    EligibilityResponse,
    EligibleStudentResponse,
    EnrolledOfferingResponse,
    EnrollmentResponse,
    EnrollOnBehalfRequest,
    OfferingSummary,
)

router = APIRouter()


def _enrollment_response(result: EnrollmentResult) -> EnrollmentResponse:
    return EnrollmentResponse(
        student_id=result.student_id,
        course_offering_id=result.course_offering_id,
        already_enrolled=result.already_enrolled,
        enrollment_id=result.enrollment_id,
        created_at=result.created_at,
    )


@router.get("/offerings/{offering_id}/eligibility", response_model=EligibilityResponse)
async def get_eligibility(
    offering_id: str,
    student: Annotated[StudentPrincipal, Depends(get_current_student)],
    gate: Annotated[EligibilityGate, Depends(get_eligibility_gate)],
) -> EligibilityResponse:
    """Whether the calling student may enroll in the offering."""
    assert student.student_id is not None
    decision = await gate.can_enroll(student.student_id, offering_id)
    return EligibilityResponse(
        offering_id=offering_id,
        outcome=decision.outcome,
        allowed=decision.allowed,
        reason=decision.reason,
    )


@router.get("/student/enrollments", response_model=list[EnrolledOfferingResponse])
async def list_my_enrollments(
    student: Annotated[StudentPrincipal, Depends(get_current_student)],
    service: Annotated[EnrollmentService, Depends(get_enrollment_service)],
    session_id: Annotated[str | None, Query()] = None,
) -> list[EnrolledOfferingResponse]:
    assert student.student_id is not None
    rows = await service.list_for_student(student.student_id, session_id)
    return [
        EnrolledOfferingResponse(
            enrollment_id=row.enrollment_id,
            offering=OfferingSummary(
                id=row.offering.id,
                course_code=row.offering.course_code,
                title=row.offering.title,
                session_id=row.offering.session_id,
                semester=row.offering.semester,
                level=row.offering.level,
            ),
            enrolled_at=row.enrolled_at,
        )
        for row in rows
    ]


@router.post("/student/enrollments/{offering_id}", response_model=EnrollmentResponse)
@limit_writes
async def enroll_self(
    request: Request,
    response: Response,
    offering_id: str,
    student: Annotated[StudentPrincipal, Depends(get_current_student)],
    service: Annotated[EnrollmentService, Depends(get_enrollment_service)],
) -> EnrollmentResponse:
    """Enroll the caller; 201 when created, 200 when already enrolled."""
    assert student.student_id is not None
    result = await service.enroll(student.student_id, offering_id)
    response.status_code = 200 if result.already_enrolled else 201
    return _enrollment_response(result)


@router.delete("/student/enrollments/{offering_id}", status_code=204)
@limit_writes
async def withdraw_self(
    request: Request,
    offering_id: str,
    student: Annotated[StudentPrincipal, Depends(get_current_student)],
    service: Annotated[EnrollmentService, Depends(get_enrollment_service)],
) -> Response:
    assert student.student_id is not None
    await service.withdraw(student.student_id, offering_id)
    return Response(status_code=204)


@router.get(
    "/offerings/{offering_id}/eligible-students",
    response_model=list[EligibleStudentResponse],
)
async def list_eligible_students(
    offering_id: str,
    _: Annotated[Principal, Depends(require_offering_capability(Capability.VIEW_ROSTER))],
    gate: Annotated[EligibilityGate, Depends(get_eligibility_gate)],
) -> list[EligibleStudentResponse]:
    """Students who could enroll now and have not yet."""
    rows = await gate.eligible_students(offering_id)
    return [
        EligibleStudentResponse(
            student_id=r.student_id,
            profile_id=r.profile_id,
            matric_no=r.matric_no,
            first_name=r.first_name,
            last_name=r.last_name,
            email=r.email,
            level=r.level,
        )
        for r in rows
    ]


@router.post("/offerings/{offering_id}/enrollments", response_model=EnrollmentResponse)
@limit_writes
async def enroll_on_behalf(
    request: Request,
    response: Response,
    offering_id: str,
    body: EnrollOnBehalfRequest,
    _: Annotated[
        Principal, Depends(require_offering_capability(Capability.MANAGE_ENROLLMENTS))
    ],
    service: Annotated[EnrollmentService, Depends(get_enrollment_service)],
) -> EnrollmentResponse:
    """Enroll a student on their behalf; the eligibility gate still applies."""
    result = await service.enroll(body.student_id, offering_id)
    response.status_code = 200 if result.already_enrolled else 201
    return _enrollment_response(result)
