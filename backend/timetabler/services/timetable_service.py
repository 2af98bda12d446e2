from __future__ import annotations

import logging
import random
from time import perf_counter

from sqlalchemy import delete
from sqlalchemy.orm import Session

from timetabler.core.exceptions import ResourceNotFoundError, SchedulerError
from timetabler.models.timetable import TimetableAssignment, UnscheduledSession
from timetabler.models.timetable_conflict_decision import ConflictDecision, TimetableConflictDecision
from timetabler.schemas.conflict import AutoResolveReport, ConflictDetail, ConflictReport
from timetabler.schemas.generator import DashboardOut, GenerateTimetableResponse, RetryUnscheduledResponse
from timetabler.schemas.settings import DAYS
from timetabler.schemas.timetable import SchedulingState, UnscheduledItem
from timetabler.services.conflict_service import count_auto_resolvable, detect_conflicts
from timetabler.services.scheduler import generate, place_session, suitable_rooms
from timetabler.services.timetable_store import (
    ignored_conflict_ids,
    load_state,
    next_unscheduled_position,
    replace_timetable,
)

logger = logging.getLogger(__name__)

REMOVED_BY_RESOLUTION_REASON = "Removed while resolving a conflict"


def make_rng(seed: int | None) -> random.Random:
    return random.Random(seed)


def validate_for_generation(state: SchedulingState) -> None:
    if not state.courses:
        raise SchedulerError("No courses available. Please add courses first.")
    if not state.faculty:
        raise SchedulerError("No faculty available. Please add faculty first.")
    if not state.rooms:
        raise SchedulerError("No rooms available. Please add rooms first.")
    if not state.class_slots():
        raise SchedulerError("No class time slots configured. Please add a class time slot first.")


def generate_timetable(db: Session, rng: random.Random) -> GenerateTimetableResponse:
    started = perf_counter()
    state = load_state(db)
    validate_for_generation(state)
    logger.info(
        "TIMETABLE GENERATION START | courses=%s | rooms=%s | class_slots=%s | strict_capacity=%s",
        len(state.courses),
        len(state.rooms),
        len(state.class_slots()),
        state.preferences.strict_capacity_check,
    )

    result = generate(
        state.courses,
        state.rooms,
        DAYS,
        state.class_slots(),
        state.preferences,
        faculty=state.faculty,
        rng=rng,
    )
    replace_timetable(db, result.timetable, result.unscheduled)

    state.timetable = result.timetable
    state.unscheduled = result.unscheduled
    conflicts = detect_conflicts(state)

    logger.info(
        "TIMETABLE GENERATION COMPLETE | scheduled=%s/%s (%s%%) | unscheduled=%s | conflicts=%s | wall_ms=%s",
        result.scheduled_sessions,
        result.total_sessions,
        result.efficiency,
        len(result.unscheduled),
        len(conflicts),
        int((perf_counter() - started) * 1000),
    )
    return GenerateTimetableResponse(
        timetable=result.timetable,
        unscheduled=result.unscheduled,
        conflicts=conflicts,
        total_sessions=result.total_sessions,
        scheduled_sessions=result.scheduled_sessions,
        efficiency=result.efficiency,
    )


def scan_conflicts(db: Session) -> list[ConflictDetail]:
    conflicts = detect_conflicts(load_state(db))
    ignored = ignored_conflict_ids(db)
    for conflict in conflicts:
        conflict.ignored = conflict.id in ignored
    return conflicts


def conflict_report(db: Session) -> ConflictReport:
    conflicts = scan_conflicts(db)
    active = [conflict for conflict in conflicts if not conflict.ignored]
    if active:
        logger.info("Found %d conflicts that need attention", len(active))
    return ConflictReport(
        total_conflicts=len(conflicts),
        active_conflicts=len(active),
        conflicts=conflicts,
    )


def _find_conflict(db: Session, conflict_id: str) -> ConflictDetail:
    for conflict in scan_conflicts(db):
        if conflict.id == conflict_id:
            return conflict
    raise ResourceNotFoundError("Conflict", conflict_id)


def resolve_conflict(db: Session, conflict_id: str, assignment_id: str | None = None) -> ConflictReport:
    """Remove one assignment involved in a conflict, then rescan.

    Without ``assignment_id`` the last assignment listed on the conflict is
    removed. The removed session is moved to the unscheduled list.
    """
    conflict = _find_conflict(db, conflict_id)
    target_id = assignment_id or conflict.assignment_ids[-1]
    if target_id not in conflict.assignment_ids:
        raise SchedulerError(
            f"Assignment {target_id} is not part of conflict {conflict_id}",
            details={"assignment_ids": conflict.assignment_ids},
        )

    row = db.get(TimetableAssignment, target_id)
    if row is None:
        raise ResourceNotFoundError("Assignment", target_id)

    state = load_state(db)
    course = state.course_map().get(row.course_id)
    faculty = state.faculty_map().get(course.faculty_id) if course else None
    db.add(UnscheduledSession(
        id=row.id,
        position=next_unscheduled_position(db),
        course_id=row.course_id,
        course_name=course.name if course else row.course_id,
        faculty_id=course.faculty_id if course else None,
        faculty_name=faculty.name if faculty else (course.faculty_id if course else None),
        reason=REMOVED_BY_RESOLUTION_REASON,
    ))
    db.delete(row)
    db.execute(delete(TimetableConflictDecision).where(TimetableConflictDecision.conflict_id == conflict_id))
    db.commit()
    logger.info("Resolved conflict %s by removing assignment %s (%s %s)", conflict_id, target_id, conflict.day, conflict.slot_id)
    return conflict_report(db)


def ignore_conflict(db: Session, conflict_id: str) -> ConflictDetail:
    conflict = _find_conflict(db, conflict_id)
    if not conflict.ignored:
        db.add(TimetableConflictDecision(
            conflict_id=conflict.id,
            decision=ConflictDecision.ignored,
            conflict_snapshot=conflict.model_dump(mode="json"),
        ))
        db.commit()
        conflict.ignored = True
    logger.info("Conflict %s ignored", conflict_id)
    return conflict


def auto_resolve_conflicts(db: Session) -> AutoResolveReport:
    conflicts = scan_conflicts(db)
    resolved_count = count_auto_resolvable(conflicts)
    return AutoResolveReport(resolved_count=resolved_count, conflicts=scan_conflicts(db))


def list_unscheduled(db: Session) -> list[UnscheduledItem]:
    return load_state(db).unscheduled


def retry_unscheduled(db: Session, item_id: str, rng: random.Random) -> RetryUnscheduledResponse:
    record = db.get(UnscheduledSession, item_id)
    if record is None:
        raise ResourceNotFoundError("Unscheduled session", item_id)

    state = load_state(db)
    course = state.course_map().get(record.course_id)
    if course is None:
        raise SchedulerError(f"Course {record.course_id} no longer exists")
    if db.get(TimetableAssignment, item_id) is not None:
        raise SchedulerError(f"Session {item_id} is already on the timetable")

    placement = place_session(
        state.timetable,
        course=course,
        assignment_id=item_id,
        days=DAYS,
        class_slots=state.class_slots(),
        rooms=suitable_rooms(course, state.rooms, state.preferences),
        rng=rng,
    )
    if placement is None:
        logger.info("Retry for %s found no free slot", item_id)
        return RetryUnscheduledResponse(scheduled=False, unscheduled=state.unscheduled)

    db.add(TimetableAssignment(
        id=placement.assignment.id,
        day=placement.day,
        slot_id=placement.slot_id,
        course_id=placement.assignment.course_id,
        room_id=placement.assignment.room_id,
    ))
    db.delete(record)
    db.commit()
    logger.info("Retry placed %s on %s slot %s", item_id, placement.day, placement.slot_id)
    return RetryUnscheduledResponse(
        scheduled=True,
        day=placement.day,
        slot_id=placement.slot_id,
        room_id=placement.assignment.room_id,
        unscheduled=[item for item in state.unscheduled if item.id != item_id],
    )


def dismiss_unscheduled(db: Session, item_id: str) -> None:
    record = db.get(UnscheduledSession, item_id)
    if record is None:
        raise ResourceNotFoundError("Unscheduled session", item_id)
    db.delete(record)
    db.commit()


def dashboard(db: Session) -> DashboardOut:
    state = load_state(db)
    conflicts = [conflict for conflict in scan_conflicts(db) if not conflict.ignored]
    total_sessions = sum(course.sessions_per_week for course in state.courses)
    scheduled = total_sessions - len(state.unscheduled)
    percentage = round(scheduled / total_sessions * 100) if total_sessions > 0 else 0
    return DashboardOut(
        course_count=len(state.courses),
        faculty_count=len(state.faculty),
        student_count=len(state.students),
        room_count=len(state.rooms),
        conflict_count=len(conflicts),
        unscheduled_count=len(state.unscheduled),
        total_sessions=total_sessions,
        scheduled_percentage=max(0, min(100, percentage)),
    )
