"""Domain value objects: principals and sequence codes."""

from campus.domain.value_objects.codes import (
    SequenceKey,
    format_code,
    normalize_namespace,
    year_suffix,
)
from campus.domain.value_objects.principal import (
    AcademicStaffPrincipal,
    AdminPrincipal,
    NonAcademicStaffPrincipal,
    Principal,
    StudentPrincipal,
)

__all__ = [
    "AcademicStaffPrincipal",
    "AdminPrincipal",
    "NonAcademicStaffPrincipal",
    "Principal",
    "SequenceKey",
    "StudentPrincipal",
    "format_code",
    "normalize_namespace",
    "year_suffix",
]
