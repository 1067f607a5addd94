"""SQL shape of the allocator upsert and driver error classification (no database)."""

from contextlib import asynccontextmanager
from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from campus.application.dtos.provisioning import ProfileCreate
from campus.domain.enums import CodeKind, Role
from campus.domain.exceptions import EmailAlreadyRegisteredException, ValidationException
from campus.domain.value_objects import SequenceKey
from campus.infrastructure.persistence.repositories.provisioning_store import (
    SqlProvisioningStore,
    is_foreign_key_violation,
    is_unique_violation,
)
from campus.infrastructure.persistence.repositories.sequence_allocator import (
    build_next_value_statement,
)


def _compile(stmt) -> str:
    return " ".join(str(stmt.compile(dialect=postgresql.dialect())).split())


def test_allocation_is_a_single_upsert_returning_the_value() -> None:
    key = SequenceKey(CodeKind.STAFF, "MLS", "24")
    sql = _compile(build_next_value_statement(key))
    assert sql.startswith("INSERT INTO sequence_counter")
    assert "ON CONFLICT (namespace, year_suffix) DO UPDATE SET" in sql
    assert "sequence_counter.value +" in sql
    assert sql.endswith("RETURNING sequence_counter.value")


def test_allocation_binds_key_and_initial_value() -> None:
    key = SequenceKey(CodeKind.MATRIC, "NUR", "25")
    params = build_next_value_statement(key).compile(dialect=postgresql.dialect()).params
    assert params["namespace"] == "matric:NUR"
    assert params["year_suffix"] == "25"
    assert params["value"] == 1


class _DriverError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


def test_foreign_key_violation_is_recognized() -> None:
    exc = IntegrityError("INSERT ...", {}, _DriverError("23503"))
    assert is_foreign_key_violation(exc)


def test_unique_violation_is_not_foreign_key() -> None:
    exc = IntegrityError("INSERT ...", {}, _DriverError("23505"))
    assert not is_foreign_key_violation(exc)


def test_check_violation_is_neither_unique_nor_foreign_key() -> None:
    exc = IntegrityError("INSERT ...", {}, _DriverError("23514"))
    assert not is_unique_violation(exc)
    assert not is_foreign_key_violation(exc)


class _RejectingStore(SqlProvisioningStore):
    """Store whose commit fails with the given SQLSTATE."""

    def __init__(self, sqlstate: str) -> None:
        super().__init__(MagicMock())
        self.sqlstate = sqlstate

    @asynccontextmanager
    async def transaction(self):
        yield MagicMock()
        raise IntegrityError("INSERT INTO profile ...", {}, _DriverError(self.sqlstate))


def _profile() -> ProfileCreate:
    return ProfileCreate(
        id="idn-1",
        email="ada@campus.test",
        role=Role.STUDENT,
        first_name="Ada",
        last_name="Obi",
    )


async def test_duplicate_profile_email_is_conflict() -> None:
    with pytest.raises(EmailAlreadyRegisteredException):
        await _RejectingStore("23505").create_profile(_profile())


async def test_profile_check_violation_is_validation_error() -> None:
    with pytest.raises(ValidationException) as exc_info:
        await _RejectingStore("23514").create_profile(_profile())
    assert exc_info.value.details == {"field": "profile"}
