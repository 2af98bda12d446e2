from typing import Literal

from pydantic import BaseModel, Field, field_validator

from timetabler.schemas.settings import TIME_PATTERN
from timetabler.schemas.timetable import TimeSlotPayload


class TimeSlotCreate(TimeSlotPayload):
    pass


class TimeSlotUpdate(BaseModel):
    start_time: str | None = None
    end_time: str | None = None
    label: str | None = Field(default=None, min_length=1, max_length=100)
    type: Literal["class", "break"] | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str | None) -> str | None:
        if value is not None and not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value


class TimeSlotOut(TimeSlotPayload):
    pass
