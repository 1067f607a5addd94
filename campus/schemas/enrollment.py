"""Eligibility and enrollment API schemas."""

from datetime import datetime

from pydantic import BaseModel

from campus.application.dtos.enrollment import EligibilityOutcome


class EligibilityResponse(BaseModel):
    """Response for GET /offerings/{id}/eligibility."""

    offering_id: str
    outcome: EligibilityOutcome
    allowed: bool
    reason: str | None = None


class EnrollmentResponse(BaseModel):
    """Enrollment outcome. already_enrolled=true is an idempotent success (200)."""

    student_id: str
    course_offering_id: str
    already_enrolled: bool = False
    enrollment_id: str | None = None
    created_at: datetime | None = None


class EnrollOnBehalfRequest(BaseModel):
    """Request body for POST /offerings/{id}/enrollments."""

    student_id: str


class OfferingSummary(BaseModel):
    id: str
    course_code: str
    title: str | None = None
    session_id: str
    semester: str
    level: str | None = None


class EnrolledOfferingResponse(BaseModel):
    enrollment_id: str
    offering: OfferingSummary
    enrolled_at: datetime


class EligibleStudentResponse(BaseModel):
    student_id: str
    profile_id: str
    matric_no: str
    first_name: str
    last_name: str
    email: str
    level: str | None = None


class PublishOfferingRequest(BaseModel):
    """Request body for PATCH /offerings/{id}/publish."""

    is_published: bool = True


class OfferingResponse(BaseModel):
    id: str
    course_code: str
    title: str | None = None
    session_id: str
    semester: str
    program_id: str | None = None
    level: str | None = None
    is_published: bool
