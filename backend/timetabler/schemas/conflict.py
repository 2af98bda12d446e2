from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

ConflictType = Literal[
    "faculty_conflict",
    "room_conflict",
    "student_conflict",
    "capacity_conflict",
]


class ConflictDetail(BaseModel):
    id: str
    type: ConflictType
    title: str
    description: str
    day: str
    slot_id: str
    time_slot: str
    faculty: Optional[str] = None
    room: Optional[str] = None
    student: Optional[str] = None
    course: Optional[str] = None
    courses: List[str] = Field(default_factory=list)
    assignment_ids: List[str] = Field(default_factory=list)
    student_count: Optional[int] = None
    capacity: Optional[int] = None
    suggestions: List[str] = Field(default_factory=list)
    ignored: bool = False


class ConflictReport(BaseModel):
    total_conflicts: int
    active_conflicts: int
    conflicts: List[ConflictDetail]


class ResolveConflictRequest(BaseModel):
    assignment_id: Optional[str] = None


class AutoResolveReport(BaseModel):
    resolved_count: int
    conflicts: List[ConflictDetail]


class ConflictExport(BaseModel):
    generated_at: datetime
    total_conflicts: int
    conflicts: List[ConflictDetail]
