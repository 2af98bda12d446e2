from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from timetabler.db.base import Base


class SchedulingPreferencesRecord(Base):
    __tablename__ = "scheduling_preferences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    strict_capacity_check: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    allow_overlapping_breaks: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
