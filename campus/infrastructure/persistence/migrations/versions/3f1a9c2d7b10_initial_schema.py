"""Initial schema: profiles, role records, sequence counters, applications, offerings

Revision ID: 3f1a9c2d7b10
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1a9c2d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    cols = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        )
    ]
    if updated:
        cols.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.text("now()"),
                nullable=False,
            )
        )
    return cols


def upgrade() -> None:
    """Create initial schema."""
    op.create_table(
        "department",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "program",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("department_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["department_id"], ["department.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "academic_session",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("is_current", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # Profile id is the identity store user id.
    op.create_table(
        "profile",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("middle_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("gender", sa.String(), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("state_of_origin", sa.String(), nullable=True),
        sa.Column("lga_of_origin", sa.String(), nullable=True),
        sa.Column("nin", sa.String(), nullable=True),
        sa.Column("religion", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("onboarding_status", sa.String(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('admin', 'student', 'academic_staff', 'non_academic_staff')",
            name="profile_role_check",
        ),
        sa.CheckConstraint(
            "onboarding_status IN ('pending', 'active')", name="profile_onboarding_check"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(op.f("ix_profile_role"), "profile", ["role"], unique=False)

    op.create_table(
        "student",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("profile_id", sa.String(), nullable=False),
        sa.Column("matric_no", sa.String(), nullable=False),
        sa.Column("program_id", sa.String(), nullable=False),
        sa.Column("department_id", sa.String(), nullable=True),
        sa.Column("admission_session_id", sa.String(), nullable=True),
        sa.Column("admission_type", sa.String(), nullable=False),
        sa.Column("previous_school", sa.String(), nullable=True),
        sa.Column("previous_qualification", sa.String(), nullable=True),
        sa.Column("special_needs", sa.String(), nullable=True),
        sa.Column("level", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("enrollment_date", sa.Date(), nullable=True),
        sa.Column("guardian_first_name", sa.String(), nullable=True),
        sa.Column("guardian_last_name", sa.String(), nullable=True),
        sa.Column("guardian_phone", sa.String(), nullable=True),
        sa.Column("guardian_status", sa.String(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "admission_type IN ('fresh', 'direct_entry')",
            name="student_admission_type_check",
        ),
        sa.CheckConstraint(
            "status IN ('active', 'suspended', 'graduated', 'withdrawn')",
            name="student_status_check",
        ),
        sa.ForeignKeyConstraint(["profile_id"], ["profile.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["program_id"], ["program.id"]),
        sa.ForeignKeyConstraint(["department_id"], ["department.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["admission_session_id"], ["academic_session.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("profile_id"),
        sa.UniqueConstraint("matric_no"),
    )
    op.create_index(op.f("ix_student_program_id"), "student", ["program_id"], unique=False)
    op.create_index(op.f("ix_student_status"), "student", ["status"], unique=False)

    op.create_table(
        "staff",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("profile_id", sa.String(), nullable=False),
        sa.Column("staff_no", sa.String(), nullable=False),
        sa.Column("department_id", sa.String(), nullable=True),
        sa.Column("designation", sa.String(), nullable=True),
        sa.Column("specialization", sa.String(), nullable=True),
        sa.Column("unit", sa.String(), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('active', 'suspended', 'graduated', 'withdrawn')",
            name="staff_status_check",
        ),
        sa.CheckConstraint(
            "unit IN ('admissions', 'bursary', 'exams')", name="staff_unit_check"
        ),
        sa.ForeignKeyConstraint(["profile_id"], ["profile.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["department_id"], ["department.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("profile_id"),
        sa.UniqueConstraint("staff_no"),
    )

    op.create_table(
        "sequence_counter",
        sa.Column("namespace", sa.String(), nullable=False),
        sa.Column("year_suffix", sa.String(length=2), nullable=False),
        sa.Column("value", sa.BigInteger(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("value >= 1", name="sequence_counter_value_check"),
        sa.PrimaryKeyConstraint("namespace", "year_suffix"),
    )

    op.create_table(
        "student_registration",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("student_id", sa.String(), nullable=False),
        sa.Column("session_id", sa.String(), nullable=False),
        sa.Column("level", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('registered', 'pending', 'deferred', 'cancelled')",
            name="registration_status_check",
        ),
        sa.ForeignKeyConstraint(["student_id"], ["student.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["session_id"], ["academic_session.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "student_id", "session_id", name="uq_registration_student_session"
        ),
    )

    op.create_table(
        "student_document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("student_id", sa.String(), nullable=False),
        sa.Column("doc_type", sa.String(), nullable=False),
        sa.Column("bucket", sa.String(), nullable=False),
        sa.Column("path", sa.String(), nullable=False),
        sa.Column("original_name", sa.String(), nullable=True),
        sa.Column("mime_type", sa.String(), nullable=True),
        *_timestamps(updated=False),
        sa.CheckConstraint(
            "doc_type IN ('passport', 'signature', 'academic_result', 'birth_or_age', "
            "'sponsorship_letter', 'supporting_optional')",
            name="student_document_type_check",
        ),
        sa.ForeignKeyConstraint(["student_id"], ["student.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_student_document_student_id"), "student_document", ["student_id"], unique=False
    )

    op.create_table(
        "application",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("middle_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("gender", sa.String(), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("state_of_origin", sa.String(), nullable=True),
        sa.Column("lga_of_origin", sa.String(), nullable=True),
        sa.Column("nin", sa.String(), nullable=True),
        sa.Column("religion", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("guardian_first_name", sa.String(), nullable=True),
        sa.Column("guardian_last_name", sa.String(), nullable=True),
        sa.Column("guardian_phone", sa.String(), nullable=True),
        sa.Column("guardian_status", sa.String(), nullable=True),
        sa.Column("program_id", sa.String(), nullable=False),
        sa.Column("session_id", sa.String(), nullable=False),
        sa.Column("sponsorship_type", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("reviewed_by", sa.String(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("converted_student_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')", name="application_status_check"
        ),
        sa.CheckConstraint(
            "sponsorship_type IN ('government', 'school_owner', 'external_body')",
            name="application_sponsorship_check",
        ),
        sa.ForeignKeyConstraint(["program_id"], ["program.id"]),
        sa.ForeignKeyConstraint(["session_id"], ["academic_session.id"]),
        sa.ForeignKeyConstraint(
            ["converted_student_id"], ["student.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_application_email"), "application", ["email"], unique=False)
    op.create_index(op.f("ix_application_status"), "application", ["status"], unique=False)

    op.create_table(
        "application_document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("application_id", sa.String(), nullable=False),
        sa.Column("doc_type", sa.String(), nullable=False),
        sa.Column("bucket", sa.String(), nullable=False),
        sa.Column("path", sa.String(), nullable=False),
        sa.Column("original_name", sa.String(), nullable=True),
        sa.Column("mime_type", sa.String(), nullable=True),
        *_timestamps(updated=False),
        sa.CheckConstraint(
            "doc_type IN ('passport', 'signature', 'academic_result', 'birth_or_age', "
            "'sponsorship_letter', 'supporting_optional')",
            name="application_document_type_check",
        ),
        sa.ForeignKeyConstraint(["application_id"], ["application.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_application_document_application_id"),
        "application_document",
        ["application_id"],
        unique=False,
    )

    op.create_table(
        "course_offering",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("course_code", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("session_id", sa.String(), nullable=False),
        sa.Column("semester", sa.String(), nullable=False),
        sa.Column("program_id", sa.String(), nullable=True),
        sa.Column("level", sa.String(), nullable=True),
        sa.Column("is_published", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["session_id"], ["academic_session.id"]),
        sa.ForeignKeyConstraint(["program_id"], ["program.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_course_offering_session_id"), "course_offering", ["session_id"], unique=False
    )

    op.create_table(
        "course_offering_program",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("course_offering_id", sa.String(), nullable=False),
        sa.Column("program_id", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(
            ["course_offering_id"], ["course_offering.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["program_id"], ["program.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("course_offering_id", "program_id", name="uq_offering_program"),
    )

    op.create_table(
        "course_offering_staff",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("course_offering_id", sa.String(), nullable=False),
        sa.Column("staff_id", sa.String(), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(
            ["course_offering_id"], ["course_offering.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["staff_id"], ["staff.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("course_offering_id", "staff_id", name="uq_offering_staff"),
    )
    op.create_index(
        op.f("ix_course_offering_staff_staff_id"),
        "course_offering_staff",
        ["staff_id"],
        unique=False,
    )

    op.create_table(
        "enrollment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("student_id", sa.String(), nullable=False),
        sa.Column("course_offering_id", sa.String(), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(["student_id"], ["student.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["course_offering_id"], ["course_offering.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("student_id", "course_offering_id", name="uq_enrollment_pair"),
    )
    op.create_index(op.f("ix_enrollment_student_id"), "enrollment", ["student_id"], unique=False)
    op.create_index(
        op.f("ix_enrollment_course_offering_id"),
        "enrollment",
        ["course_offering_id"],
        unique=False,
    )


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    for table in (
        "enrollment",
        "course_offering_staff",
        "course_offering_program",
        "course_offering",
        "application_document",
        "application",
        "student_document",
        "student_registration",
        "sequence_counter",
        "staff",
        "student",
        "profile",
        "academic_session",
        "program",
        "department",
    ):
        op.drop_table(table)
