from __future__ import annotations

import logging

from sqlalchemy import select

from timetabler.db.base import Base
from timetabler.db.session import SessionLocal, engine
from timetabler.models.time_slot import TimeSlot, TimeSlotType

logger = logging.getLogger(__name__)

DEFAULT_TIME_SLOTS: list[dict[str, str]] = [
    {"id": "1", "start_time": "08:50", "end_time": "09:40", "label": "Period 1 (8:50-9:40 AM)", "type": "class"},
    {"id": "2", "start_time": "09:40", "end_time": "10:30", "label": "Period 2 (9:40-10:30 AM)", "type": "class"},
    {"id": "break1", "start_time": "10:30", "end_time": "10:45", "label": "Small Break", "type": "break"},
    {"id": "3", "start_time": "10:45", "end_time": "11:35", "label": "Period 3 (10:45-11:35 AM)", "type": "class"},
    {"id": "4", "start_time": "11:35", "end_time": "11:50", "label": "Period 4 (11:35-11:50 AM)", "type": "class"},
    {"id": "lunch1", "start_time": "11:50", "end_time": "12:35", "label": "Lunch Break A", "type": "break"},
    {"id": "lunch2", "start_time": "12:35", "end_time": "13:20", "label": "Lunch Break B", "type": "break"},
    {"id": "5", "start_time": "13:20", "end_time": "14:10", "label": "Period 5 (1:20-2:10 PM)", "type": "class"},
    {"id": "6", "start_time": "14:10", "end_time": "14:30", "label": "Period 6 (2:10-2:30 PM)", "type": "class"},
    {"id": "break2", "start_time": "14:30", "end_time": "14:45", "label": "Small Break", "type": "break"},
    {"id": "7", "start_time": "14:45", "end_time": "15:35", "label": "Period 7 (2:45-3:35 PM)", "type": "class"},
    {"id": "8", "start_time": "15:35", "end_time": "16:15", "label": "Period 8 (3:35-4:15 PM)", "type": "class"},
]


def seed_default_time_slots(db) -> int:
    existing = db.execute(select(TimeSlot.id).limit(1)).first()
    if existing is not None:
        return 0
    for item in DEFAULT_TIME_SLOTS:
        db.add(TimeSlot(**{**item, "type": TimeSlotType(item["type"])}))
    db.commit()
    return len(DEFAULT_TIME_SLOTS)


def ensure_runtime_schema(*, create_tables: bool = True, seed_time_slots: bool = True) -> None:
    import timetabler.models  # noqa: F401

    if create_tables:
        Base.metadata.create_all(bind=engine)
    if not seed_time_slots:
        return
    with SessionLocal() as db:
        seeded = seed_default_time_slots(db)
    if seeded:
        logger.info("Seeded %d default time slots", seeded)
