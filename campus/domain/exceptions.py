"""Domain exceptions for campus-core.

Defines domain-level exceptions that represent business rule violations and
collaborator failures. These exceptions are independent of infrastructure
concerns. The presentation layer maps them to HTTP responses in exception
handlers (see campus.core.exception_handlers).

Taxonomy:
    ValidationException: bad or missing input; never retried.
    ConflictException: uniqueness violation (email, code, enrollment pair).
    DependencyException: identity store or database unreachable / timed out;
        retryable by the caller.
    PolicyException: document set policy or eligibility rejection; carries
        the specific reason, never retried automatically.
"""

from typing import Any


class CampusException(Exception):
    """Base exception for all campus-core errors.

    All custom exceptions inherit from this class so that handlers and logs
    can treat them uniformly. Presentation layer maps these to HTTP responses
    using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CampusException):
    """Raised when input validation fails (missing field, bad format)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ConflictException(CampusException):
    """Raised when a uniqueness constraint is violated (already exists)."""

    def __init__(
        self,
        message: str,
        resource: str,
        details_extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and the conflicting resource.

        Args:
            message: Human-readable description.
            resource: What already exists (e.g. 'profile', 'enrollment').
            details_extra: Optional extra keys (e.g. email).
        """
        details = {"resource": resource, **(details_extra or {})}
        super().__init__(message, "CONFLICT", details)


class EmailAlreadyRegisteredException(ConflictException):
    """Raised when provisioning an email that is already bound to a profile or identity."""

    def __init__(self, email: str) -> None:
        super().__init__(
            "A user with this email already exists.",
            resource="profile",
            details_extra={"email": email},
        )


class DependencyException(CampusException):
    """Raised when an external collaborator fails or times out.

    The message shown to users is deliberately generic; the underlying reason
    is kept in details for logs.
    """

    def __init__(self, dependency: str, reason: str) -> None:
        """Initialize with the failing dependency and the reason.

        Args:
            dependency: 'identity_store' or 'database'.
            reason: Short description of the failure (not shown to users).
        """
        super().__init__(
            "The service is temporarily unavailable; please try again.",
            "DEPENDENCY_ERROR",
            {"dependency": dependency, "reason": reason},
        )


class PolicyException(CampusException):
    """Raised when a business policy rejects an operation (e.g. document set)."""

    def __init__(
        self,
        reason: str,
        policy: str,
        error_code: str = "POLICY_VIOLATION",
    ) -> None:
        """Initialize with the specific reason.

        Args:
            reason: Human-readable reason surfaced verbatim to the caller.
            policy: Policy name (e.g. 'document_set', 'eligibility').
            error_code: Machine-readable code.
        """
        super().__init__(reason, error_code, {"policy": policy, "reason": reason})
        self.reason = reason


class EnrollmentDeniedException(PolicyException):
    """Raised when the eligibility gate denies an enrollment."""

    def __init__(self, reason: str, student_id: str, offering_id: str) -> None:
        super().__init__(reason, "eligibility", "ENROLLMENT_DENIED")
        self.details.update({"student_id": student_id, "offering_id": offering_id})


class AuthenticationException(CampusException):
    """Raised when authentication fails (missing or invalid token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(CampusException):
    """Raised when the caller lacks the capability for the operation."""

    def __init__(
        self,
        capability: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional capability and message.

        Args:
            capability: Capability that was required (e.g. 'provision_staff').
            message: Human-readable message; default used when capability omitted.
        """
        if capability:
            message = f"Permission denied: {capability}"
        details = {"capability": capability} if capability else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(CampusException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'application', 'course_offering').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidStateException(CampusException):
    """Raised when an entity is not in a state that permits the operation."""

    def __init__(self, message: str, resource_type: str, state: str) -> None:
        super().__init__(
            message,
            "INVALID_STATE",
            {"resource_type": resource_type, "state": state},
        )
