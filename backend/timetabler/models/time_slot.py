from enum import Enum

from sqlalchemy import Enum as SAEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from timetabler.db.base import Base


class TimeSlotType(str, Enum):
    class_ = "class"
    break_ = "break"


class TimeSlot(Base):
    __tablename__ = "time_slots"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[TimeSlotType] = mapped_column(
        SAEnum(TimeSlotType, name="time_slot_type", values_callable=lambda members: [item.value for item in members]),
        nullable=False,
        default=TimeSlotType.class_,
    )
