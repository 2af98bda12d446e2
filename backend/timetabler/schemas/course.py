from pydantic import BaseModel, Field, field_validator

from timetabler.schemas.timetable import CoursePayload, normalize_roster


class CourseCreate(CoursePayload):
    pass


class CourseUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    sessions_per_week: int | None = Field(default=None, ge=1, le=60)
    faculty_id: str | None = Field(default=None, min_length=1, max_length=64)
    student_ids: list[str] | None = None

    @field_validator("student_ids")
    @classmethod
    def dedupe_roster(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return normalize_roster(value)


class CourseOut(CoursePayload):
    pass
