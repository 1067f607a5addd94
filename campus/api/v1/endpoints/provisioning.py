"""Provisioning API: thin routes delegating to ProvisioningSaga."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from campus.api.v1.dependencies import (
    get_provisioning_saga,
    require_capability,
    require_super_admin,
)
from campus.application.dtos.provisioning import (
    ProvisioningRequest,
    ProvisioningResult,
    StaffDetails,
    StudentDetails,
)
from campus.application.services.capability_guard import Capability
from campus.application.services.provisioning_saga import ProvisioningSaga
from campus.core.limiter import limit_provisioning
from campus.domain.enums import Role
from campus.domain.value_objects import Principal
from campus.schemas.provisioning import (
    AdminInviteRequest,
    ProvisioningResponse,
    StaffCreateRequest,
    StudentCreateRequest,
)

router = APIRouter()


def _to_response(result: ProvisioningResult) -> ProvisioningResponse:
    return ProvisioningResponse(
        profile_id=result.profile_id,
        role_record_id=result.role_record_id,
        code=result.code,
        temporary_password=result.generated_credential,
        warnings=list(result.warnings),
    )


@router.post("/students", response_model=ProvisioningResponse, status_code=201)
@limit_provisioning
async def create_student(
    request: Request,
    body: StudentCreateRequest,
    _: Annotated[Principal, Depends(require_capability(Capability.PROVISION_STUDENT))],
    saga: Annotated[ProvisioningSaga, Depends(get_provisioning_saga)],
) -> ProvisioningResponse:
    """Create identity, profile and student record with a matric number."""
    result = await saga.provision(
        ProvisioningRequest(
            role=Role.STUDENT,
            email=body.email,
            first_name=body.first_name,
            last_name=body.last_name,
            middle_name=body.middle_name,
            phone=body.phone,
            gender=body.gender,
            date_of_birth=body.date_of_birth,
            state_of_origin=body.state_of_origin,
            lga_of_origin=body.lga_of_origin,
            nin=body.nin,
            religion=body.religion,
            address=body.address,
            password=body.password.get_secret_value() if body.password else None,
            student=StudentDetails(
                program_id=body.program_id,
                session_id=body.session_id,
                department_id=body.department_id,
                admission_type=body.admission_type,
                previous_school=body.previous_school,
                previous_qualification=body.previous_qualification,
                special_needs=body.special_needs,
                level=body.level,
                enrollment_date=body.enrollment_date,
                guardian_first_name=body.guardian_first_name,
                guardian_last_name=body.guardian_last_name,
                guardian_phone=body.guardian_phone,
                guardian_status=body.guardian_status,
            ),
        )
    )
    return _to_response(result)


@router.post("/staff", response_model=ProvisioningResponse, status_code=201)
@limit_provisioning
async def create_staff(
    request: Request,
    body: StaffCreateRequest,
    _: Annotated[Principal, Depends(require_capability(Capability.PROVISION_STAFF))],
    saga: Annotated[ProvisioningSaga, Depends(get_provisioning_saga)],
) -> ProvisioningResponse:
    """Create identity, profile and staff record with a staff code."""
    result = await saga.provision(
        ProvisioningRequest(
            role=Role(body.role),
            email=body.email,
            first_name=body.first_name,
            last_name=body.last_name,
            middle_name=body.middle_name,
            phone=body.phone,
            gender=body.gender,
            date_of_birth=body.date_of_birth,
            state_of_origin=body.state_of_origin,
            lga_of_origin=body.lga_of_origin,
            nin=body.nin,
            religion=body.religion,
            address=body.address,
            password=body.password.get_secret_value() if body.password else None,
            staff=StaffDetails(
                department_id=body.department_id,
                designation=body.designation,
                specialization=body.specialization,
                unit=body.unit,
                hire_date=body.hire_date,
            ),
        )
    )
    return _to_response(result)


@router.post("/admins/invite", response_model=ProvisioningResponse, status_code=201)
@limit_provisioning
async def invite_admin(
    request: Request,
    body: AdminInviteRequest,
    _: Annotated[Principal, Depends(require_super_admin)],
    saga: Annotated[ProvisioningSaga, Depends(get_provisioning_saga)],
) -> ProvisioningResponse:
    """Invite an administrator (identity + profile, no role record)."""
    result = await saga.provision(
        ProvisioningRequest(
            role=Role.ADMIN,
            email=body.email,
            first_name=body.first_name,
            last_name=body.last_name,
            phone=body.phone,
            invite=True,
        )
    )
    return _to_response(result)
