"""Sequence codes: allocate then format matric numbers and staff codes.

Allocation is delegated to the atomic store-side counter; formatting is pure.
"""

import logging
from datetime import date

from campus.application.interfaces.repositories import ISequenceAllocator
from campus.domain.enums import CodeKind
from campus.domain.value_objects import (
    SequenceKey,
    format_code,
    normalize_namespace,
    year_suffix,
)
from campus.shared.utils.datetime import utc_today

logger = logging.getLogger(__name__)


class SequenceCodeService:
    """NextCode: allocate (kind, namespace, year) and format with the kind's prefix."""

    def __init__(
        self,
        allocator: ISequenceAllocator,
        *,
        matric_prefix: str,
        staff_prefix: str,
        generic_namespace: str,
    ) -> None:
        self.allocator = allocator
        self.matric_prefix = matric_prefix
        self.staff_prefix = staff_prefix
        self.generic_namespace = generic_namespace

    def key_for(
        self, namespace: str | None, kind: CodeKind, on: date | None = None
    ) -> SequenceKey:
        """Build the counter key; empty namespace falls back to the generic one."""
        return SequenceKey(
            kind,
            normalize_namespace(namespace, self.generic_namespace),
            year_suffix(on or utc_today()),
        )

    def prefix_for(self, kind: CodeKind) -> str:
        if kind is CodeKind.MATRIC:
            return self.matric_prefix
        if kind is CodeKind.STAFF:
            return self.staff_prefix
        raise ValueError(f"Unknown code kind: {kind}")

    async def next_code(
        self, namespace: str | None, kind: CodeKind, on: date | None = None
    ) -> str:
        """Allocate the next value for (kind, namespace, year of `on`) and format it.

        The allocated value is consumed even if the caller later fails; gaps
        are never reclaimed.
        """
        key = self.key_for(namespace, kind, on)
        value = await self.allocator.next(key)
        code = format_code(self.prefix_for(kind), key, value)
        logger.debug("Allocated %s code %s", kind.value, code)
        return code
