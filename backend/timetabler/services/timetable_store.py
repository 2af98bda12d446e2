from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from timetabler.models.course import Course
from timetabler.models.faculty import Faculty
from timetabler.models.room import Room
from timetabler.models.scheduling_preferences import SchedulingPreferencesRecord
from timetabler.models.student import Student
from timetabler.models.time_slot import TimeSlot
from timetabler.models.timetable import TimetableAssignment, UnscheduledSession
from timetabler.models.timetable_conflict_decision import TimetableConflictDecision
from timetabler.schemas.settings import DAYS, SchedulingPreferences
from timetabler.schemas.timetable import (
    AssignmentPayload,
    CoursePayload,
    FacultyPayload,
    RoomPayload,
    SchedulingState,
    StudentPayload,
    Timetable,
    TimeSlotPayload,
    UnscheduledItem,
    empty_timetable,
)


def load_preferences(db: Session) -> SchedulingPreferences:
    record = db.get(SchedulingPreferencesRecord, 1)
    if record is None:
        return SchedulingPreferences()
    return SchedulingPreferences.model_validate(record)


def save_preferences(db: Session, preferences: SchedulingPreferences) -> SchedulingPreferences:
    record = db.get(SchedulingPreferencesRecord, 1)
    if record is None:
        record = SchedulingPreferencesRecord(id=1)
        db.add(record)
    record.strict_capacity_check = preferences.strict_capacity_check
    record.allow_overlapping_breaks = preferences.allow_overlapping_breaks
    db.commit()
    db.refresh(record)
    return SchedulingPreferences.model_validate(record)


def load_timetable(db: Session) -> Timetable:
    timetable = empty_timetable()
    rows = db.execute(
        select(TimetableAssignment).order_by(TimetableAssignment.created_at, TimetableAssignment.id)
    ).scalars()
    for row in rows:
        timetable.setdefault(row.day, {}).setdefault(row.slot_id, []).append(AssignmentPayload.model_validate(row))
    return timetable


def load_unscheduled(db: Session) -> list[UnscheduledItem]:
    rows = db.execute(select(UnscheduledSession).order_by(UnscheduledSession.position)).scalars()
    return [UnscheduledItem.model_validate(row) for row in rows]


def load_state(db: Session) -> SchedulingState:
    """Snapshot every entity, the persisted grid and the unscheduled list.

    Entities keep creation order so generation handles courses in the order
    they were entered.
    """
    courses = db.execute(select(Course).order_by(Course.created_at, Course.id)).scalars()
    faculty = db.execute(select(Faculty).order_by(Faculty.created_at, Faculty.id)).scalars()
    students = db.execute(select(Student).order_by(Student.created_at, Student.id)).scalars()
    rooms = db.execute(select(Room).order_by(Room.created_at, Room.id)).scalars()
    time_slots = db.execute(select(TimeSlot).order_by(TimeSlot.id)).scalars()
    return SchedulingState(
        courses=[CoursePayload.model_validate(row) for row in courses],
        faculty=[FacultyPayload.model_validate(row) for row in faculty],
        students=[StudentPayload.model_validate(row) for row in students],
        rooms=[RoomPayload.model_validate(row) for row in rooms],
        time_slots=[TimeSlotPayload.model_validate(row) for row in time_slots],
        preferences=load_preferences(db),
        timetable=load_timetable(db),
        unscheduled=load_unscheduled(db),
    )


def _assignment_rows(timetable: Timetable) -> Iterable[TimetableAssignment]:
    for day in DAYS:
        for slot_id, assignments in timetable.get(day, {}).items():
            for assignment in assignments:
                yield TimetableAssignment(
                    id=assignment.id,
                    day=day,
                    slot_id=slot_id,
                    course_id=assignment.course_id,
                    room_id=assignment.room_id,
                )


def replace_timetable(db: Session, timetable: Timetable, unscheduled: list[UnscheduledItem]) -> None:
    """Swap the persisted grid for a new one in a single transaction.

    Conflict decisions refer to cells of the old grid, so they are dropped too.
    """
    try:
        db.execute(delete(TimetableAssignment))
        db.execute(delete(UnscheduledSession))
        db.execute(delete(TimetableConflictDecision))
        db.add_all(list(_assignment_rows(timetable)))
        db.add_all(
            UnscheduledSession(position=index, **item.model_dump())
            for index, item in enumerate(unscheduled)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise


def next_unscheduled_position(db: Session) -> int:
    positions = db.execute(select(UnscheduledSession.position)).scalars().all()
    return max(positions, default=-1) + 1


def ignored_conflict_ids(db: Session) -> set[str]:
    return set(db.execute(select(TimetableConflictDecision.conflict_id)).scalars())
