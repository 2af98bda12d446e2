from pydantic import BaseModel, Field

from timetabler.schemas.timetable import StudentPayload


class StudentCreate(StudentPayload):
    pass


class StudentUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    course_ids: list[str] | None = None


class StudentOut(StudentPayload):
    pass
