"""create timetabling schema

Revision ID: 20261018_0001
Revises: None
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


time_slot_type_enum = sa.Enum("class", "break", name="time_slot_type")
conflict_decision_enum = sa.Enum("ignored", name="conflict_decision")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "faculty",
        sa.Column("id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("department", sa.String(length=200), nullable=True),
        sa.Column("course_ids", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("sessions_per_week", sa.Integer(), nullable=False),
        sa.Column("faculty_id", sa.String(length=64), nullable=False),
        sa.Column("student_ids", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_courses_faculty_id", "courses", ["faculty_id"])
    op.create_table(
        "students",
        sa.Column("id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("course_ids", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "rooms",
        sa.Column("id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "time_slots",
        sa.Column("id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("label", sa.String(length=100), nullable=False),
        sa.Column("type", time_slot_type_enum, nullable=False),
    )
    op.create_table(
        "timetable_assignments",
        sa.Column("id", sa.String(length=80), primary_key=True, nullable=False),
        sa.Column("day", sa.String(length=10), nullable=False),
        sa.Column("slot_id", sa.String(length=64), nullable=False),
        sa.Column("course_id", sa.String(length=64), nullable=False),
        sa.Column("room_id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_timetable_assignments_day", "timetable_assignments", ["day"])
    op.create_table(
        "unscheduled_sessions",
        sa.Column("id", sa.String(length=80), primary_key=True, nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.String(length=64), nullable=False),
        sa.Column("course_name", sa.String(length=200), nullable=False),
        sa.Column("faculty_id", sa.String(length=64), nullable=True),
        sa.Column("faculty_name", sa.String(length=200), nullable=True),
        sa.Column("reason", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        "timetable_conflict_decisions",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("conflict_id", sa.String(length=255), nullable=False),
        sa.Column("decision", conflict_decision_enum, nullable=False),
        sa.Column("conflict_snapshot", sa.JSON(), nullable=False),
        sa.Column("decided_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(
        "ix_timetable_conflict_decisions_conflict_id",
        "timetable_conflict_decisions",
        ["conflict_id"],
        unique=True,
    )
    op.create_table(
        "scheduling_preferences",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("strict_capacity_check", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("allow_overlapping_breaks", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("scheduling_preferences")
    op.drop_index("ix_timetable_conflict_decisions_conflict_id", table_name="timetable_conflict_decisions")
    op.drop_table("timetable_conflict_decisions")
    op.drop_table("unscheduled_sessions")
    op.drop_index("ix_timetable_assignments_day", table_name="timetable_assignments")
    op.drop_table("timetable_assignments")
    op.drop_table("time_slots")
    op.drop_table("rooms")
    op.drop_table("students")
    op.drop_index("ix_courses_faculty_id", table_name="courses")
    op.drop_table("courses")
    op.drop_table("faculty")
    conflict_decision_enum.drop(op.get_bind(), checkfirst=True)
    time_slot_type_enum.drop(op.get_bind(), checkfirst=True)
