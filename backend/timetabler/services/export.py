"""Derived views of the timetable: nested JSON, per-entity CSV and reports."""
from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from typing import Literal

from timetabler.core.exceptions import ResourceNotFoundError, SchedulerError
from timetabler.schemas.conflict import ConflictDetail, ConflictExport
from timetabler.schemas.settings import DAYS
from timetabler.schemas.timetable import SchedulingState, Timetable, empty_timetable

ViewType = Literal["faculty", "student", "room"]
VIEW_TYPES = ("faculty", "student", "room")


def master_timetable(state: SchedulingState) -> dict:
    nested: dict[str, dict[str, list[dict]]] = {day: {} for day in DAYS}
    for day in DAYS:
        for slot_id, assignments in state.timetable.get(day, {}).items():
            if assignments:
                nested[day][slot_id] = [assignment.model_dump() for assignment in assignments]
    return nested


def resolve_entity(state: SchedulingState, view_type: str, entity_id: str):
    if view_type not in VIEW_TYPES:
        raise SchedulerError(f"Unknown timetable view '{view_type}'", details={"allowed": list(VIEW_TYPES)})
    lookup = {
        "faculty": state.faculty_map,
        "student": state.student_map,
        "room": state.room_map,
    }[view_type]()
    entity = lookup.get(entity_id)
    if entity is None:
        raise ResourceNotFoundError(view_type.capitalize(), entity_id)
    return entity


def individual_schedule(state: SchedulingState, view_type: ViewType, entity_id: str) -> Timetable:
    """Keep only the cells that concern one faculty member, student or room."""
    course_map = state.course_map()
    schedule = empty_timetable()
    for day in DAYS:
        for slot_id, assignments in state.timetable.get(day, {}).items():
            matching = []
            for assignment in assignments:
                course = course_map.get(assignment.course_id)
                if view_type == "faculty":
                    include = course is not None and course.faculty_id == entity_id
                elif view_type == "student":
                    include = course is not None and entity_id in course.student_ids
                else:
                    include = assignment.room_id == entity_id
                if include:
                    matching.append(assignment)
            if matching:
                schedule[day][slot_id] = matching
    return schedule


def schedule_to_csv(state: SchedulingState, schedule: Timetable, view_type: ViewType) -> str:
    course_map = state.course_map()
    room_map = state.room_map()
    faculty_map = state.faculty_map()

    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(["Time", *DAYS])
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for slot in state.class_slots():
        row = [slot.label]
        for day in DAYS:
            cells = []
            for assignment in schedule.get(day, {}).get(slot.id, []):
                course = course_map.get(assignment.course_id)
                if course is None:
                    continue
                room = room_map.get(assignment.room_id)
                room_name = room.name if room else "TBA"
                member = faculty_map.get(course.faculty_id)
                faculty_name = member.name if member else course.faculty_id
                if view_type == "faculty":
                    cells.append(f"{course.name} (Room: {room_name})")
                elif view_type == "student":
                    cells.append(f"{course.name} - {faculty_name} (Room: {room_name})")
                else:
                    cells.append(f"{course.name} - {faculty_name} ({course.roster_size} students)")
            row.append("; ".join(cells))
        writer.writerow(row)
    return buffer.getvalue()


def entity_timetable_csv(state: SchedulingState, view_type: str, entity_id: str) -> str:
    resolve_entity(state, view_type, entity_id)
    schedule = individual_schedule(state, view_type, entity_id)
    return schedule_to_csv(state, schedule, view_type)


BULK_EXPORTS = {
    "faculty": ("All Faculty Timetables", "total_faculty", "No faculty members available to export"),
    "student": ("All Student Timetables", "total_students", "No students available to export"),
    "room": ("All Room Timetables", "total_rooms", "No rooms available to export"),
}


def bulk_timetables(state: SchedulingState, view_type: str) -> dict:
    """One CSV schedule per faculty member, student or room, in a single document."""
    if view_type not in VIEW_TYPES:
        raise SchedulerError(f"Unknown timetable view '{view_type}'", details={"allowed": list(VIEW_TYPES)})
    export_type, total_key, empty_message = BULK_EXPORTS[view_type]
    entities = {"faculty": state.faculty, "student": state.students, "room": state.rooms}[view_type]
    if not entities:
        raise SchedulerError(empty_message)

    data = []
    for entity in entities:
        row = {"name": entity.name, "id": entity.id}
        if view_type == "faculty":
            row["department"] = entity.department or "N/A"
        elif view_type == "student":
            row["courses"] = list(entity.course_ids)
        else:
            row["capacity"] = entity.capacity
        schedule = individual_schedule(state, view_type, entity.id)
        row["schedule"] = schedule_to_csv(state, schedule, view_type)
        data.append(row)

    return {
        "export_type": export_type,
        "export_date": datetime.now(timezone.utc).isoformat(),
        total_key: len(entities),
        "data": data,
    }


def conflict_export(conflicts: list[ConflictDetail]) -> ConflictExport:
    return ConflictExport(
        generated_at=datetime.now(timezone.utc),
        total_conflicts=len(conflicts),
        conflicts=conflicts,
    )


def full_export(state: SchedulingState, conflicts: list[ConflictDetail]) -> dict:
    return {
        "courses": [course.model_dump() for course in state.courses],
        "faculty": [member.model_dump() for member in state.faculty],
        "students": [student.model_dump() for student in state.students],
        "rooms": [room.model_dump() for room in state.rooms],
        "time_slots": [slot.model_dump() for slot in state.time_slots],
        "preferences": state.preferences.model_dump(),
        "timetable": master_timetable(state),
        "conflicts": [conflict.model_dump(mode="json") for conflict in conflicts],
        "unscheduled": [item.model_dump() for item in state.unscheduled],
        "export_date": datetime.now(timezone.utc).isoformat(),
    }
