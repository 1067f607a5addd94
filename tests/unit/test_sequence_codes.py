"""Sequence keys, code formatting and SequenceCodeService with a mocked allocator."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from campus.application.services.sequence_codes import SequenceCodeService
from campus.domain.enums import CodeKind
from campus.domain.exceptions import ValidationException
from campus.domain.value_objects import (
    SequenceKey,
    format_code,
    normalize_namespace,
    year_suffix,
)


class CountingAllocator:
    """In-memory allocator with the same contract as the SQL upsert."""

    def __init__(self, primed: dict[SequenceKey, int] | None = None) -> None:
        self.values = dict(primed or {})
        self.calls: list[SequenceKey] = []

    async def next(self, key: SequenceKey) -> int:
        self.calls.append(key)
        self.values[key] = self.values.get(key, 0) + 1
        return self.values[key]


def _service(allocator) -> SequenceCodeService:
    return SequenceCodeService(
        allocator, matric_prefix="SYK", staff_prefix="STF", generic_namespace="GEN"
    )


def test_year_suffix_is_two_digits() -> None:
    assert year_suffix(date(2024, 3, 1)) == "24"
    assert year_suffix(date(2005, 1, 1)) == "05"
    assert year_suffix(date(2100, 1, 1)) == "00"


def test_normalize_namespace_uppercases_and_falls_back() -> None:
    assert normalize_namespace(" mls ", "GEN") == "MLS"
    assert normalize_namespace("", "gen") == "GEN"
    assert normalize_namespace(None, "GEN") == "GEN"


def test_normalize_namespace_rejects_separator() -> None:
    with pytest.raises(ValidationException):
        normalize_namespace("ML/S", "GEN")


def test_sequence_key_validates_year_suffix() -> None:
    with pytest.raises(ValidationException):
        SequenceKey(CodeKind.STAFF, "MLS", "2024")


def test_format_code_pads_to_four_digits() -> None:
    key = SequenceKey(CodeKind.STAFF, "MLS", "24")
    assert format_code("STF", key, 4) == "STF/MLS/24/0004"
    nur = SequenceKey(CodeKind.MATRIC, "NUR", "25")
    assert format_code("SYK", nur, 12) == "SYK/NUR/25/0012"


def test_format_code_does_not_truncate_wide_values() -> None:
    nur = SequenceKey(CodeKind.MATRIC, "NUR", "25")
    assert format_code("SYK", nur, 12345) == "SYK/NUR/25/12345"


def test_format_code_rejects_zero() -> None:
    with pytest.raises(ValueError):
        format_code("SYK", SequenceKey(CodeKind.MATRIC, "NUR", "25"), 0)


async def test_primed_counter_continues_from_last_value() -> None:
    """MLS/24 primed at 3 hands out 0004 then 0005."""
    allocator = CountingAllocator({SequenceKey(CodeKind.STAFF, "MLS", "24"): 3})
    service = _service(allocator)
    on = date(2024, 9, 1)
    assert await service.next_code("MLS", CodeKind.STAFF, on=on) == "STF/MLS/24/0004"
    assert await service.next_code("mls", CodeKind.STAFF, on=on) == "STF/MLS/24/0005"


async def test_matric_and_staff_series_are_separate_for_same_code() -> None:
    """A program and a department both coded MLS keep their own counters."""
    allocator = CountingAllocator({SequenceKey(CodeKind.STAFF, "MLS", "24"): 3})
    service = _service(allocator)
    on = date(2024, 9, 1)
    assert await service.next_code("MLS", CodeKind.MATRIC, on=on) == "SYK/MLS/24/0001"
    assert await service.next_code("MLS", CodeKind.STAFF, on=on) == "STF/MLS/24/0004"
    assert await service.next_code("MLS", CodeKind.MATRIC, on=on) == "SYK/MLS/24/0002"
    assert await service.next_code("MLS", CodeKind.STAFF, on=on) == "STF/MLS/24/0005"
    assert {str(k) for k in allocator.values} == {"staff:MLS:24", "matric:MLS:24"}


async def test_first_code_in_new_year_starts_at_one() -> None:
    allocator = CountingAllocator({SequenceKey(CodeKind.MATRIC, "NUR", "24"): 57})
    service = _service(allocator)
    code = await service.next_code("NUR", CodeKind.MATRIC, on=date(2025, 1, 2))
    assert code == "SYK/NUR/25/0001"


async def test_missing_namespace_uses_generic() -> None:
    allocator = CountingAllocator()
    service = _service(allocator)
    code = await service.next_code(None, CodeKind.STAFF, on=date(2024, 5, 5))
    assert code == "STF/GEN/24/0001"
    assert allocator.calls == [SequenceKey(CodeKind.STAFF, "GEN", "24")]


async def test_allocator_error_propagates_without_code() -> None:
    allocator = AsyncMock()
    allocator.next = AsyncMock(side_effect=RuntimeError("db down"))
    service = _service(allocator)
    with pytest.raises(RuntimeError):
        await service.next_code("MLS", CodeKind.STAFF, on=date(2024, 1, 1))


def test_prefix_for_each_kind() -> None:
    service = _service(CountingAllocator())
    assert service.prefix_for(CodeKind.MATRIC) == "SYK"
    assert service.prefix_for(CodeKind.STAFF) == "STF"
