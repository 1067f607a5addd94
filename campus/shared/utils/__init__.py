"""Shared utilities: UTC datetime helpers and generators."""

from campus.shared.utils.datetime import ensure_utc, utc_now, utc_today
from campus.shared.utils.generators import generate_cuid, generate_temporary_password

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "generate_temporary_password",
    "utc_now",
    "utc_today",
]
