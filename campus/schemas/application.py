"""Application intake API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from campus.application.dtos.application import ReviewAction
from campus.domain.enums import ApplicationStatus


class ApplicationReviewRequest(BaseModel):
    """Request body for PATCH /applications/{id}/review."""

    action: ReviewAction
    reason: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def require_reason_on_reject(self) -> "ApplicationReviewRequest":
        if self.action is ReviewAction.REJECT and not (self.reason or "").strip():
            raise ValueError("reason is required when rejecting")
        return self


class ApplicationResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    program_id: str
    session_id: str
    status: ApplicationStatus
    rejection_reason: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    converted_student_id: str | None = None

    model_config = {"from_attributes": True}


class ConversionResponse(BaseModel):
    """Result of POST /applications/{id}/convert."""

    application_id: str
    student_id: str
    profile_id: str
    matric_no: str
    warnings: list[str] = Field(default_factory=list)
