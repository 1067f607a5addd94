"""Tests for domain exceptions (error_code, message, details)."""

from campus.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CampusException,
    ConflictException,
    DependencyException,
    EmailAlreadyRegisteredException,
    EnrollmentDeniedException,
    InvalidStateException,
    PolicyException,
    ResourceNotFoundException,
    ValidationException,
)


def test_campus_exception_default_error_code() -> None:
    """Base CampusException uses class name as error_code when not provided."""
    exc = CampusException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "CampusException"
    assert exc.details == {}
    assert exc.to_dict() == {
        "error": "CampusException",
        "message": "Something failed",
        "details": {},
    }


def test_validation_exception_with_and_without_field() -> None:
    assert ValidationException("Invalid", field="email").details == {"field": "email"}
    assert ValidationException("Invalid").details == {}
    assert ValidationException("Invalid").error_code == "VALIDATION_ERROR"


def test_email_already_registered_is_a_conflict() -> None:
    exc = EmailAlreadyRegisteredException("ada@campus.test")
    assert isinstance(exc, ConflictException)
    assert exc.error_code == "CONFLICT"
    assert exc.details == {"resource": "profile", "email": "ada@campus.test"}


def test_dependency_exception_keeps_reason_out_of_message() -> None:
    exc = DependencyException("database", "connection refused")
    assert exc.error_code == "DEPENDENCY_ERROR"
    assert "connection refused" not in exc.message
    assert exc.details == {"dependency": "database", "reason": "connection refused"}


def test_policy_exception_surfaces_reason_verbatim() -> None:
    exc = PolicyException("Maximum 6 documents allowed.", "document_set")
    assert exc.message == exc.reason == "Maximum 6 documents allowed."
    assert exc.error_code == "POLICY_VIOLATION"


def test_enrollment_denied_carries_pair() -> None:
    exc = EnrollmentDeniedException("offering not published", "stu-1", "off-1")
    assert isinstance(exc, PolicyException)
    assert exc.error_code == "ENROLLMENT_DENIED"
    assert exc.details == {
        "policy": "eligibility",
        "reason": "offering not published",
        "student_id": "stu-1",
        "offering_id": "off-1",
    }


def test_authorization_exception_names_capability() -> None:
    exc = AuthorizationException(capability="view_roster")
    assert exc.message == "Permission denied: view_roster"
    assert exc.details == {"capability": "view_roster"}
    assert AuthorizationException().details == {}


def test_authentication_not_found_and_state() -> None:
    assert AuthenticationException().error_code == "AUTHENTICATION_ERROR"
    nf = ResourceNotFoundException("application", "app-1")
    assert nf.message == "application not found: app-1"
    state = InvalidStateException("Already converted", "application", "converted")
    assert state.details == {"resource_type": "application", "state": "converted"}
