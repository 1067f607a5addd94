"""Presentation-layer dependency injection (composition root)."""

from .auth import (
    get_current_principal,
    get_current_student,
    get_identity_id,
    require_capability,
    require_offering_capability,
    require_super_admin,
)
from .services import (
    get_convert_application_use_case,
    get_eligibility_gate,
    get_enrollment_service,
    get_identity_store,
    get_offering_repo,
    get_provisioning_saga,
    get_provisioning_store,
    get_publish_offering_use_case,
    get_review_application_use_case,
    get_sequence_code_service,
)

__all__ = [
    "get_convert_application_use_case",
    "get_current_principal",
    "get_current_student",
    "get_eligibility_gate",
    "get_enrollment_service",
    "get_identity_id",
    "get_identity_store",
    "get_offering_repo",
    "get_provisioning_saga",
    "get_provisioning_store",
    "get_publish_offering_use_case",
    "get_review_application_use_case",
    "get_sequence_code_service",
    "require_capability",
    "require_offering_capability",
    "require_super_admin",
]
