from __future__ import annotations

import re

from pydantic import BaseModel

DAYS: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

DAY_VALUES = set(DAYS)

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


class SchedulingPreferences(BaseModel):
    strict_capacity_check: bool = True
    # Stored for clients; generation never places sessions in break slots.
    allow_overlapping_breaks: bool = False

    model_config = {"from_attributes": True}


class SchedulingPreferencesUpdate(BaseModel):
    strict_capacity_check: bool | None = None
    allow_overlapping_breaks: bool | None = None
