from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from timetabler.schemas.settings import DAYS, SchedulingPreferences
from timetabler.schemas.timetable import (
    NO_SLOT_REASON,
    AssignmentPayload,
    CoursePayload,
    FacultyPayload,
    RoomPayload,
    Timetable,
    TimeSlotPayload,
    UnscheduledItem,
    session_key,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    day: str
    slot_id: str
    assignment: AssignmentPayload


@dataclass
class GenerationResult:
    timetable: Timetable
    unscheduled: list[UnscheduledItem] = field(default_factory=list)
    total_sessions: int = 0
    scheduled_sessions: int = 0
    scheduled_by_course: dict[str, int] = field(default_factory=dict)

    @property
    def efficiency(self) -> int:
        if self.total_sessions <= 0:
            return 100
        return round(self.scheduled_sessions / self.total_sessions * 100)


def suitable_rooms(
    course: CoursePayload,
    rooms: Sequence[RoomPayload],
    preferences: SchedulingPreferences,
) -> list[RoomPayload]:
    """Rooms big enough for the roster, or every room when none is.

    Capacity is advisory: a course is never left without candidate rooms
    because of it. The detector reports the overflow afterwards.
    """
    candidates = [
        room
        for room in rooms
        if not preferences.strict_capacity_check or room.capacity >= course.roster_size
    ]
    if not candidates:
        candidates = list(rooms)
    return candidates


def is_slot_available(timetable: Timetable, day: str, slot_id: str) -> bool:
    return not timetable.get(day, {}).get(slot_id)


def place_session(
    timetable: Timetable,
    *,
    course: CoursePayload,
    assignment_id: str,
    days: Sequence[str],
    class_slots: Sequence[TimeSlotPayload],
    rooms: Sequence[RoomPayload],
    rng: random.Random,
) -> Placement | None:
    """Claim the first empty cell in day-major, start-time-minor order.

    The room is drawn uniformly from ``rooms``. Returns ``None`` when every
    cell of the week is taken, or when there is no room to draw from.
    """
    if not rooms:
        return None
    for day in days:
        for slot in class_slots:
            if not is_slot_available(timetable, day, slot.id):
                continue
            room = rng.choice(list(rooms))
            assignment = AssignmentPayload(
                id=assignment_id,
                course_id=course.id,
                room_id=room.id,
            )
            timetable.setdefault(day, {})[slot.id] = [assignment]
            return Placement(day=day, slot_id=slot.id, assignment=assignment)
    return None


def generate(
    courses: Sequence[CoursePayload],
    rooms: Sequence[RoomPayload],
    days: Sequence[str] = DAYS,
    class_slots: Sequence[TimeSlotPayload] = (),
    preferences: SchedulingPreferences | None = None,
    *,
    faculty: Sequence[FacultyPayload] = (),
    rng: random.Random | None = None,
) -> GenerationResult:
    """Build a fresh weekly timetable.

    Courses are handled one by one in input order, each session independently,
    with no backtracking. Only cell exclusivity is enforced here; faculty,
    room, student and capacity clashes are left for the conflict detector.
    Room choice is random, so two runs over the same input can differ unless
    a seeded ``rng`` is passed.
    """
    preferences = preferences or SchedulingPreferences()
    rng = rng if rng is not None else random.Random()
    faculty_names = {member.id: member.name for member in faculty}

    result = GenerationResult(timetable={day: {} for day in days})
    for course in courses:
        candidates = suitable_rooms(course, rooms, preferences)
        placed = 0
        for session_number in range(1, course.sessions_per_week + 1):
            placement = place_session(
                result.timetable,
                course=course,
                assignment_id=session_key(course.id, session_number),
                days=days,
                class_slots=class_slots,
                rooms=candidates,
                rng=rng,
            )
            if placement is not None:
                placed += 1
                continue
            result.unscheduled.append(
                UnscheduledItem(
                    id=session_key(course.id, session_number),
                    course_id=course.id,
                    course_name=course.name,
                    faculty_id=course.faculty_id,
                    faculty_name=faculty_names.get(course.faculty_id, course.faculty_id),
                    reason=NO_SLOT_REASON,
                )
            )

        result.total_sessions += course.sessions_per_week
        result.scheduled_sessions += placed
        result.scheduled_by_course[course.id] = placed
        if placed < course.sessions_per_week:
            logger.debug(
                "Course %s placed %d of %d sessions",
                course.id,
                placed,
                course.sessions_per_week,
            )

    return result
