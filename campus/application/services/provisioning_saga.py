"""Provisioning saga: Identity + Profile + RoleRecord with ordered compensation.

The three writes live in two systems (identity store, relational store), so
they cannot share a transaction. Each step commits on its own; when a later
step fails, the compensations registered so far run in reverse order:

    1. create identity        (no compensation)
    2. create profile         -> delete identity
    3. resolve namespace      (read-only)
    4. allocate + format code -> delete profile, delete identity
    5. create role record     -> delete profile, delete identity

Allocated sequence values are never reclaimed. A failing compensation is
logged and the remaining ones still run; the original error is re-raised.
Compensation is shielded from cancellation of the calling task.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import Any, TypeVar

from campus.application.dtos.provisioning import (
    IdentityResult,
    ProfileCreate,
    ProvisioningRequest,
    ProvisioningResult,
    StaffDetails,
    StudentDetails,
)
from campus.application.interfaces.repositories import IProvisioningStore
from campus.application.interfaces.services import IIdentityStore
from campus.application.services.sequence_codes import SequenceCodeService
from campus.domain.enums import AdmissionType, CodeKind, Role
from campus.domain.exceptions import (
    DependencyException,
    EmailAlreadyRegisteredException,
    ValidationException,
)
from campus.shared.utils.generators import generate_temporary_password

logger = logging.getLogger(__name__)

T = TypeVar("T")
Compensation = tuple[str, Callable[[], Awaitable[None]]]

IDENTITY_STORE = "identity_store"
DATABASE = "database"


def normalize_email(raw: str | None) -> str:
    """Trim and lowercase; raise ValidationException if it cannot be an address."""
    email = (raw or "").strip().lower()
    local, _, domain = email.partition("@")
    if not local or not domain or "." not in domain or " " in email:
        raise ValidationException("A valid email is required", field="email")
    return email


def _required(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationException(f"{field} is required", field=field)
    return cleaned


def validate_request(request: ProvisioningRequest) -> ProvisioningRequest:
    """Check required and role-specific fields; return a normalized copy.

    Raises:
        ValidationException: On the first missing or invalid field.
    """
    normalized = replace(
        request,
        email=normalize_email(request.email),
        first_name=_required(request.first_name, "first_name"),
        last_name=_required(request.last_name, "last_name"),
    )
    role = normalized.role
    if role is Role.STUDENT:
        student = normalized.student
        if student is None:
            raise ValidationException("Student details are required", field="student")
        _required(student.program_id, "program_id")
        _required(student.session_id, "session_id")
        if student.admission_type is AdmissionType.DIRECT_ENTRY:
            _required(student.previous_school, "previous_school")
            _required(student.previous_qualification, "previous_qualification")
    elif role.is_staff:
        staff = normalized.staff or StaffDetails()
        if role is Role.NON_ACADEMIC_STAFF and staff.unit is None:
            raise ValidationException(
                "unit is required for non-academic staff", field="unit"
            )
        if role is Role.ACADEMIC_STAFF and staff.unit is not None:
            raise ValidationException(
                "unit only applies to non-academic staff", field="unit"
            )
        normalized = replace(normalized, staff=staff)
    elif role is Role.ADMIN:
        if not normalized.invite:
            raise ValidationException(
                "Administrators are provisioned by invite only", field="invite"
            )
    return normalized


class ProvisioningSaga:
    """Hand-coded provisioning saga (see module docstring for the step table)."""

    def __init__(
        self,
        identity_store: IIdentityStore,
        store: IProvisioningStore,
        codes: SequenceCodeService,
        *,
        step_timeout_seconds: float,
    ) -> None:
        self.identity_store = identity_store
        self.store = store
        self.codes = codes
        self.step_timeout_seconds = step_timeout_seconds

    async def provision(self, request: ProvisioningRequest) -> ProvisioningResult:
        """Run the saga. All three rows exist on success; none on failure.

        Raises:
            ValidationException: Bad or missing input (before any external call).
            ConflictException: Email already bound (pre-check, identity store,
                or the profile unique constraint).
            DependencyException: A collaborator failed or timed out.
        """
        request = validate_request(request)
        email = request.email

        if await self._call("check email", DATABASE, self.store.email_exists(email)):
            raise EmailAlreadyRegisteredException(email)

        compensations: list[Compensation] = []
        try:
            identity, generated = await self._create_identity(request)
            identity_id = identity.id
            compensations.append(
                ("delete identity", lambda: self.identity_store.delete_user(identity_id))
            )

            # Registered before the insert: a timed-out insert may still commit.
            compensations.append(
                ("delete profile", lambda: self.store.delete_profile(identity_id))
            )
            await self._call(
                "create profile",
                DATABASE,
                self.store.create_profile(self._profile_from(request, identity_id)),
            )

            if request.role is Role.ADMIN:
                logger.info("Invited administrator %s (%s)", email, identity_id)
                return ProvisioningResult(
                    profile_id=identity_id, role_record_id=None, code=None
                )

            record_id, code = await self._create_role_record(request, identity_id)
        except (Exception, asyncio.CancelledError):
            if compensations:
                await asyncio.shield(self._compensate(compensations, email))
            raise

        warnings: list[str] = []
        if request.role is Role.STUDENT and request.student is not None:
            warnings.extend(await self._register_admission_session(record_id, request.student))

        logger.info(
            "Provisioned %s %s (profile %s, code %s)",
            request.role.value,
            email,
            identity_id,
            code,
        )
        return ProvisioningResult(
            profile_id=identity_id,
            role_record_id=record_id,
            code=code,
            generated_credential=generated,
            warnings=tuple(warnings),
        )

    async def _call(self, step: str, dependency: str, awaitable: Awaitable[T]) -> T:
        """Await a collaborator call bounded by the step timeout."""
        try:
            return await asyncio.wait_for(awaitable, timeout=self.step_timeout_seconds)
        except asyncio.TimeoutError:
            raise DependencyException(
                dependency,
                f"{step} timed out after {self.step_timeout_seconds} seconds",
            ) from None

    async def _create_identity(
        self, request: ProvisioningRequest
    ) -> tuple[IdentityResult, str | None]:
        """Step 1. Returns the identity and the generated credential, if any.

        The generated credential is returned once on the result and never stored.
        """
        metadata: dict[str, Any] = {
            "role": request.role.value,
            "first_name": request.first_name,
            "last_name": request.last_name,
        }
        if request.invite:
            identity = await self._call(
                "invite identity",
                IDENTITY_STORE,
                self.identity_store.invite_user(request.email, metadata),
            )
            return identity, None
        generated = None if request.password else generate_temporary_password()
        identity = await self._call(
            "create identity",
            IDENTITY_STORE,
            self.identity_store.create_user(
                request.email, request.password or generated, metadata
            ),
        )
        return identity, generated

    async def _create_role_record(
        self, request: ProvisioningRequest, profile_id: str
    ) -> tuple[str, str]:
        """Steps 3-5: namespace, code, RoleRecord. Returns (record_id, code)."""
        if request.role is Role.STUDENT:
            student = request.student
            assert student is not None
            namespace = await self._call(
                "resolve program code",
                DATABASE,
                self.store.get_program_code(student.program_id),
            )
            if namespace is None:
                raise ValidationException("Program not found", field="program_id")
            code = await self._call(
                "allocate matric number",
                DATABASE,
                self.codes.next_code(namespace, CodeKind.MATRIC),
            )
            record_id = await self._call(
                "create student",
                DATABASE,
                self.store.create_student(profile_id, code, student),
            )
            return record_id, code

        staff = request.staff
        assert staff is not None
        namespace = None
        if staff.department_id:
            namespace = await self._call(
                "resolve department code",
                DATABASE,
                self.store.get_department_code(staff.department_id),
            )
            if namespace is None:
                raise ValidationException("Department not found", field="department_id")
        code = await self._call(
            "allocate staff code",
            DATABASE,
            self.codes.next_code(namespace, CodeKind.STAFF, on=staff.hire_date),
        )
        record_id = await self._call(
            "create staff",
            DATABASE,
            self.store.create_staff(profile_id, code, staff),
        )
        return record_id, code

    async def _compensate(self, compensations: list[Compensation], email: str) -> None:
        """Run compensations in reverse; log failures and continue."""
        for name, action in reversed(compensations):
            logger.warning("Provisioning %s failed; compensating: %s", email, name)
            try:
                await asyncio.wait_for(action(), timeout=self.step_timeout_seconds)
            except Exception:
                logger.exception(
                    "Compensation %r failed for %s; left for reconciliation", name, email
                )

    async def _register_admission_session(
        self, student_id: str, student: StudentDetails
    ) -> list[str]:
        """Follow-up after commit; a failure becomes a warning, not a rollback."""
        try:
            await self._call(
                "register admission session",
                DATABASE,
                self.store.upsert_registration(
                    student_id, student.session_id, student.level
                ),
            )
        except Exception:
            logger.exception(
                "Student %s created but session registration failed", student_id
            )
            return ["Student created, but session registration failed."]
        return []

    @staticmethod
    def _profile_from(request: ProvisioningRequest, identity_id: str) -> ProfileCreate:
        return ProfileCreate(
            id=identity_id,
            email=request.email,
            role=request.role,
            first_name=request.first_name,
            last_name=request.last_name,
            middle_name=request.middle_name,
            phone=request.phone,
            gender=request.gender,
            date_of_birth=request.date_of_birth,
            state_of_origin=request.state_of_origin,
            lga_of_origin=request.lga_of_origin,
            nin=request.nin,
            religion=request.religion,
            address=request.address,
        )

