"""Domain layer: enums, value objects, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from campus.domain.enums import (
    ApplicationStatus,
    DocumentType,
    RegistrationStatus,
    Role,
    Unit,
)
from campus.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CampusException,
    ConflictException,
    DependencyException,
    EnrollmentDeniedException,
    PolicyException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Enums
    "ApplicationStatus",
    "DocumentType",
    "RegistrationStatus",
    "Role",
    "Unit",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "CampusException",
    "ConflictException",
    "DependencyException",
    "EnrollmentDeniedException",
    "PolicyException",
    "ResourceNotFoundException",
    "ValidationException",
]
