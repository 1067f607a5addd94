"""Offering administration API (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from campus.api.v1.dependencies import (
    get_publish_offering_use_case,
    require_capability,
)
from campus.application.services.capability_guard import Capability
from campus.application.use_cases.offerings import PublishOfferingUseCase
from campus.core.limiter import limit_writes
from campus.domain.value_objects import Principal
from campus.schemas.enrollment import OfferingResponse, PublishOfferingRequest

router = APIRouter()


@router.patch("/{offering_id}/publish", response_model=OfferingResponse)
@limit_writes
async def publish_offering(
    request: Request,
    offering_id: str,
    body: PublishOfferingRequest,
    _: Annotated[Principal, Depends(require_capability(Capability.PUBLISH_OFFERING))],
    use_case: Annotated[PublishOfferingUseCase, Depends(get_publish_offering_use_case)],
) -> OfferingResponse:
    """Open (or close) an offering for enrollment."""
    offering = await use_case.execute(offering_id, body.is_published)
    return OfferingResponse(
        id=offering.id,
        course_code=offering.course_code,
        title=offering.title,
        session_id=offering.session_id,
        semester=offering.semester,
        program_id=offering.program_id,
        level=offering.level,
        is_published=offering.is_published,
    )
