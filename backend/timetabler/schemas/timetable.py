from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from timetabler.schemas.settings import DAYS, TIME_PATTERN, SchedulingPreferences, parse_time_to_minutes

NO_SLOT_REASON = "No suitable slot found"


def session_key(course_id: str, session_number: int) -> str:
    return f"{course_id}:{session_number}"


def normalize_roster(student_ids: list[str]) -> list[str]:
    seen: set[str] = set()
    roster: list[str] = []
    for student_id in student_ids:
        cleaned = student_id.strip()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            roster.append(cleaned)
    return roster


class CoursePayload(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    sessions_per_week: int = Field(ge=1, le=60)
    faculty_id: str = Field(min_length=1, max_length=64)
    student_ids: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}

    @field_validator("student_ids")
    @classmethod
    def dedupe_roster(cls, value: list[str]) -> list[str]:
        return normalize_roster(value)

    @property
    def roster_size(self) -> int:
        return len(self.student_ids)


class FacultyPayload(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    department: str | None = Field(default=None, max_length=200)
    course_ids: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class StudentPayload(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    course_ids: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class RoomPayload(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=100)
    capacity: int = Field(ge=1, le=5000)

    model_config = {"from_attributes": True}


class TimeSlotPayload(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    start_time: str
    end_time: str
    label: str = Field(min_length=1, max_length=100)
    type: Literal["class", "break"] = "class"

    model_config = {"from_attributes": True}

    @field_validator("type", mode="before")
    @classmethod
    def unwrap_enum(cls, value):
        return getattr(value, "value", value)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @model_validator(mode="after")
    def validate_time_order(self) -> "TimeSlotPayload":
        if parse_time_to_minutes(self.end_time) <= parse_time_to_minutes(self.start_time):
            raise ValueError("End time must be after start time")
        return self


class AssignmentPayload(BaseModel):
    id: str
    course_id: str
    room_id: str

    model_config = {"from_attributes": True}


Timetable = dict[str, dict[str, list[AssignmentPayload]]]


def empty_timetable() -> Timetable:
    return {day: {} for day in DAYS}


class UnscheduledItem(BaseModel):
    id: str
    course_id: str
    course_name: str
    faculty_id: str | None = None
    faculty_name: str | None = None
    reason: str = NO_SLOT_REASON

    model_config = {"from_attributes": True}


class SchedulingState(BaseModel):
    """Everything the scheduling engine and the conflict detector read.

    The timetable maps ``day -> slot id -> assignments``. Generation never puts
    more than one assignment in a cell, but the detector accepts any number so
    parallel sections and hand-edited cells are reported correctly.
    """

    courses: list[CoursePayload] = Field(default_factory=list)
    faculty: list[FacultyPayload] = Field(default_factory=list)
    students: list[StudentPayload] = Field(default_factory=list)
    rooms: list[RoomPayload] = Field(default_factory=list)
    time_slots: list[TimeSlotPayload] = Field(default_factory=list)
    preferences: SchedulingPreferences = Field(default_factory=SchedulingPreferences)
    timetable: Timetable = Field(default_factory=empty_timetable)
    unscheduled: list[UnscheduledItem] = Field(default_factory=list)

    def class_slots(self) -> list[TimeSlotPayload]:
        slots = [slot for slot in self.time_slots if slot.type == "class"]
        return sorted(slots, key=lambda slot: (parse_time_to_minutes(slot.start_time), slot.id))

    def assignments_for_slot(self, day: str, slot_id: str) -> list[AssignmentPayload]:
        return list(self.timetable.get(day, {}).get(slot_id, []))

    def course_map(self) -> dict[str, CoursePayload]:
        return {course.id: course for course in self.courses}

    def faculty_map(self) -> dict[str, FacultyPayload]:
        return {member.id: member for member in self.faculty}

    def student_map(self) -> dict[str, StudentPayload]:
        return {student.id: student for student in self.students}

    def room_map(self) -> dict[str, RoomPayload]:
        return {room.id: room for room in self.rooms}
