"""Value objects for sequence namespaces and formatted codes.

Formatting is pure and runs after the atomic allocation; it never talks
to the store.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

from campus.domain.enums import CodeKind
from campus.domain.exceptions import ValidationException

_NAMESPACE_RE = re.compile(r"^[A-Z0-9]{1,16}$")
SEQUENCE_WIDTH = 4


def year_suffix(on: date) -> str:
    """Two-digit year suffix (2024 -> '24')."""
    return f"{on.year % 100:02d}"


def normalize_namespace(raw: str | None, fallback: str) -> str:
    """Upper-case and strip a namespace; empty or missing falls back.

    Raises:
        ValidationException: If the normalized namespace contains characters
            that would break the code format (only A-Z and 0-9 are allowed).
    """
    value = (raw or "").strip().upper() or fallback.strip().upper()
    if not _NAMESPACE_RE.fullmatch(value):
        raise ValidationException(
            f"Invalid sequence namespace: {value!r}", field="namespace"
        )
    return value


@dataclass(frozen=True)
class SequenceKey:
    """Scope of one counter: (code kind, namespace, year suffix).

    The kind is part of the stored namespace (``staff:MLS``) so matric
    numbers and staff codes never share a series, even when a program and
    a department use the same code.
    """

    kind: CodeKind
    namespace: str
    year_suffix: str

    def __post_init__(self) -> None:
        if not _NAMESPACE_RE.fullmatch(self.namespace):
            raise ValidationException(
                f"Invalid sequence namespace: {self.namespace!r}", field="namespace"
            )
        if len(self.year_suffix) != 2 or not self.year_suffix.isdigit():
            raise ValidationException(
                f"Invalid year suffix: {self.year_suffix!r}", field="year_suffix"
            )

    @property
    def counter_namespace(self) -> str:
        """Namespace column value in sequence_counter, e.g. ``staff:MLS``."""
        return f"{self.kind.value}:{self.namespace}"

    def __str__(self) -> str:
        return f"{self.counter_namespace}:{self.year_suffix}"


def format_code(prefix: str, key: SequenceKey, value: int) -> str:
    """Format an allocated value into a human-readable code.

    Examples:
        format_code("STF", SequenceKey(CodeKind.STAFF, "MLS", "24"), 4)
            -> "STF/MLS/24/0004"
        format_code("SYK", SequenceKey(CodeKind.MATRIC, "NUR", "25"), 12)
            -> "SYK/NUR/25/0012"

    Values wider than four digits are not truncated.
    """
    if value < 1:
        raise ValueError(f"Sequence values start at 1, got {value}")
    return f"{prefix}/{key.namespace}/{key.year_suffix}/{value:0{SEQUENCE_WIDTH}d}"
