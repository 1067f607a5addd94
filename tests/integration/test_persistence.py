"""Repository integration tests. Require Postgres with migrations applied.

Each test uses unique codes and emails so reruns against the same database
do not collide.
"""

import asyncio
import uuid
from datetime import timedelta

import pytest

from campus.application.dtos.provisioning import ProfileCreate, StudentDetails
from campus.application.services.eligibility_gate import EligibilityGate
from campus.application.use_cases.enrollments import EnrollmentService
from campus.domain.enums import CodeKind, Role
from campus.domain.exceptions import EmailAlreadyRegisteredException, ValidationException
from campus.domain.value_objects import SequenceKey
from campus.infrastructure.persistence.models import (
    AcademicSession,
    CourseOffering,
    Department,
    Program,
)
from campus.infrastructure.persistence.repositories import (
    EnrollmentRepository,
    OfferingRepository,
    SqlProvisioningStore,
    SqlReconciliationRepository,
    SqlSequenceAllocator,
)
from campus.shared.utils.datetime import utc_now

pytestmark = pytest.mark.requires_db


def _tag() -> str:
    return uuid.uuid4().hex[:8].upper()


def _profile(email: str, role: Role = Role.STUDENT) -> ProfileCreate:
    return ProfileCreate(
        id=str(uuid.uuid4()), email=email, role=role, first_name="Ada", last_name="Obi"
    )


async def _seed_academics(session_factory) -> dict[str, str]:
    tag = _tag()
    async with session_factory() as session:
        async with session.begin():
            department = Department(code=f"D{tag}", name=f"Dept {tag}")
            session.add(department)
            await session.flush()
            program = Program(code=f"P{tag}", name=f"Prog {tag}", department_id=department.id)
            academic_session = AcademicSession(name=f"2025/2026-{tag}", is_current=True)
            session.add_all([program, academic_session])
            await session.flush()
            offering = CourseOffering(
                course_code=f"C{tag}",
                session_id=academic_session.id,
                semester="first",
                program_id=program.id,
                level="100",
                is_published=True,
            )
            session.add(offering)
            await session.flush()
            return {
                "program_id": program.id,
                "program_code": program.code,
                "session_id": academic_session.id,
                "offering_id": offering.id,
            }


async def test_concurrent_allocations_are_distinct_and_gapless(session_factory) -> None:
    allocator = SqlSequenceAllocator(session_factory)
    key = SequenceKey(CodeKind.STAFF, f"T{_tag()}", "24")
    values = await asyncio.gather(*(allocator.next(key) for _ in range(20)))
    assert sorted(values) == list(range(1, 21))


async def test_keys_do_not_share_counters(session_factory) -> None:
    allocator = SqlSequenceAllocator(session_factory)
    namespace = f"T{_tag()}"
    assert await allocator.next(SequenceKey(CodeKind.STAFF, namespace, "24")) == 1
    assert await allocator.next(SequenceKey(CodeKind.STAFF, namespace, "25")) == 1
    assert await allocator.next(SequenceKey(CodeKind.STAFF, namespace, "24")) == 2


async def test_kinds_do_not_share_counters(session_factory) -> None:
    allocator = SqlSequenceAllocator(session_factory)
    namespace = f"T{_tag()}"
    assert await allocator.next(SequenceKey(CodeKind.STAFF, namespace, "24")) == 1
    assert await allocator.next(SequenceKey(CodeKind.MATRIC, namespace, "24")) == 1
    assert await allocator.next(SequenceKey(CodeKind.STAFF, namespace, "24")) == 2


async def test_profile_email_is_unique(session_factory) -> None:
    store = SqlProvisioningStore(session_factory)
    email = f"dup-{_tag().lower()}@campus.test"
    first = _profile(email)
    await store.create_profile(first)
    try:
        assert await store.email_exists(email)
        with pytest.raises(EmailAlreadyRegisteredException):
            await store.create_profile(_profile(email))
    finally:
        await store.delete_profile(first.id)
    assert not await store.email_exists(email)


async def test_student_with_unknown_program_is_validation_error(session_factory) -> None:
    store = SqlProvisioningStore(session_factory)
    profile = _profile(f"fk-{_tag().lower()}@campus.test")
    await store.create_profile(profile)
    try:
        with pytest.raises(ValidationException):
            await store.create_student(
                profile.id,
                f"SYK/X/25/{_tag()}",
                StudentDetails(program_id="no-such-program", session_id="no-such-session"),
            )
    finally:
        await store.delete_profile(profile.id)


async def test_orphaned_profile_is_found(session_factory) -> None:
    store = SqlProvisioningStore(session_factory)
    profile = _profile(f"orphan-{_tag().lower()}@campus.test", Role.ACADEMIC_STAFF)
    await store.create_profile(profile)
    try:
        finder = SqlReconciliationRepository(session_factory)
        orphans = await finder.find_orphaned_profiles(utc_now() + timedelta(minutes=1))
        assert profile.id in {o.profile_id for o in orphans}
        recent = await finder.find_orphaned_profiles(utc_now() - timedelta(hours=1))
        assert profile.id not in {o.profile_id for o in recent}
    finally:
        await store.delete_profile(profile.id)


async def test_enrollment_flow(session_factory) -> None:
    seed = await _seed_academics(session_factory)
    store = SqlProvisioningStore(session_factory)
    profile = _profile(f"enrol-{_tag().lower()}@campus.test")
    await store.create_profile(profile)
    try:
        student_id = await store.create_student(
            profile.id,
            f"SYK/{seed['program_code']}/25/0001",
            StudentDetails(
                program_id=seed["program_id"], session_id=seed["session_id"], level="100"
            ),
        )

        async with session_factory() as session:
            async with session.begin():
                service = EnrollmentService(
                    EligibilityGate(OfferingRepository(session)),
                    EnrollmentRepository(session),
                )
                denied = await service.gate.can_enroll(student_id, seed["offering_id"])
                assert denied.reason == "not registered for session"

        await store.upsert_registration(student_id, seed["session_id"], "100")
        await store.upsert_registration(student_id, seed["session_id"], "100")

        async with session_factory() as session:
            async with session.begin():
                service = EnrollmentService(
                    EligibilityGate(OfferingRepository(session)),
                    EnrollmentRepository(session),
                )
                eligible = await service.gate.eligible_students(seed["offering_id"])
                assert student_id in {s.student_id for s in eligible}

                first = await service.enroll(student_id, seed["offering_id"])
                assert not first.already_enrolled
                second = await service.enroll(student_id, seed["offering_id"])
                assert second.already_enrolled

                rows = await service.list_for_student(student_id)
                assert [r.offering.id for r in rows] == [seed["offering_id"]]
                eligible = await service.gate.eligible_students(seed["offering_id"])
                assert student_id not in {s.student_id for s in eligible}

        async with session_factory() as session:
            async with session.begin():
                assert await EnrollmentRepository(session).create(
                    student_id, seed["offering_id"]
                ) is None
    finally:
        await store.delete_profile(profile.id)
