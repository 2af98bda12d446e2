from pydantic import BaseModel, Field

from timetabler.schemas.timetable import RoomPayload


class RoomCreate(RoomPayload):
    pass


class RoomUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    capacity: int | None = Field(default=None, ge=1, le=5000)


class RoomOut(RoomPayload):
    pass
