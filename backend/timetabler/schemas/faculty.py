from pydantic import BaseModel, Field

from timetabler.schemas.timetable import FacultyPayload


class FacultyCreate(FacultyPayload):
    pass


class FacultyUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    department: str | None = Field(default=None, max_length=200)
    course_ids: list[str] | None = None


class FacultyOut(FacultyPayload):
    pass
