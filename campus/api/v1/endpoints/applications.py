"""Application intake API: admissions review and conversion."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from campus.api.v1.dependencies import (
    get_convert_application_use_case,
    get_review_application_use_case,
    require_capability,
)
from campus.application.services.capability_guard import Capability
from campus.application.use_cases.applications import (
    ConvertApplicationUseCase,
    ReviewApplicationUseCase,
)
from campus.core.limiter import limit_provisioning, limit_writes
from campus.domain.value_objects import Principal
from campus.schemas.application import (
    ApplicationResponse,
    ApplicationReviewRequest,
    ConversionResponse,
)

router = APIRouter()


@router.patch("/{application_id}/review", response_model=ApplicationResponse)
@limit_writes
async def review_application(
    request: Request,
    application_id: str,
    body: ApplicationReviewRequest,
    reviewer: Annotated[Principal, Depends(require_capability(Capability.REVIEW_APPLICATION))],
    use_case: Annotated[ReviewApplicationUseCase, Depends(get_review_application_use_case)],
) -> ApplicationResponse:
    """Accept or reject a pending application."""
    result = await use_case.execute(
        application_id, body.action, reviewer.identity_id, reason=body.reason
    )
    return ApplicationResponse.model_validate(result)


@router.post("/{application_id}/convert", response_model=ConversionResponse, status_code=201)
@limit_provisioning
async def convert_application(
    request: Request,
    application_id: str,
    _: Annotated[Principal, Depends(require_capability(Capability.CONVERT_APPLICATION))],
    use_case: Annotated[ConvertApplicationUseCase, Depends(get_convert_application_use_case)],
) -> ConversionResponse:
    """Convert an accepted application into a student (invite sent by the identity store)."""
    result = await use_case.execute(application_id)
    return ConversionResponse(
        application_id=result.application_id,
        student_id=result.student_id,
        profile_id=result.profile_id,
        matric_no=result.matric_no,
        warnings=list(result.warnings),
    )
