from __future__ import annotations

from pydantic import BaseModel, Field

from timetabler.schemas.conflict import ConflictDetail
from timetabler.schemas.timetable import Timetable, TimeSlotPayload, UnscheduledItem


class GenerateTimetableRequest(BaseModel):
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)


class GenerateTimetableResponse(BaseModel):
    timetable: Timetable
    unscheduled: list[UnscheduledItem] = Field(default_factory=list)
    conflicts: list[ConflictDetail] = Field(default_factory=list)
    total_sessions: int
    scheduled_sessions: int
    efficiency: int = Field(ge=0, le=100)


class TimetableOut(BaseModel):
    days: list[str]
    class_slots: list[TimeSlotPayload]
    timetable: Timetable


class RetryUnscheduledResponse(BaseModel):
    scheduled: bool
    day: str | None = None
    slot_id: str | None = None
    room_id: str | None = None
    unscheduled: list[UnscheduledItem] = Field(default_factory=list)


class DashboardOut(BaseModel):
    course_count: int
    faculty_count: int
    student_count: int
    room_count: int
    conflict_count: int
    unscheduled_count: int
    total_sessions: int
    scheduled_percentage: int = Field(ge=0, le=100)
