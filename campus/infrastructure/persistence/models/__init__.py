"""Persistence models: ORM entities and mixins."""

from campus.infrastructure.persistence.models.academic import (
    AcademicSession,
    Department,
    Program,
)
from campus.infrastructure.persistence.models.application import (
    Application,
    ApplicationDocument,
)
from campus.infrastructure.persistence.models.course_offering import (
    CourseOffering,
    CourseOfferingProgram,
    CourseOfferingStaff,
    Enrollment,
)
from campus.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    EntityModel,
    TimestampMixin,
)
from campus.infrastructure.persistence.models.profile import Profile
from campus.infrastructure.persistence.models.sequence_counter import SequenceCounter
from campus.infrastructure.persistence.models.staff import Staff
from campus.infrastructure.persistence.models.student import (
    Student,
    StudentDocument,
    StudentRegistration,
)

__all__ = [
    "AcademicSession",
    "Application",
    "ApplicationDocument",
    "CourseOffering",
    "CourseOfferingProgram",
    "CourseOfferingStaff",
    "CreatedAtMixin",
    "CuidMixin",
    "Department",
    "EntityModel",
    "Enrollment",
    "Profile",
    "Program",
    "SequenceCounter",
    "Staff",
    "Student",
    "StudentDocument",
    "StudentRegistration",
    "TimestampMixin",
]
