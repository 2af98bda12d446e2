from sqlalchemy import select

from timetabler.db import bootstrap
from timetabler.models.time_slot import TimeSlot, TimeSlotType


def test_default_time_slots_cover_a_teaching_day():
    classes = [item for item in bootstrap.DEFAULT_TIME_SLOTS if item["type"] == "class"]
    breaks = [item for item in bootstrap.DEFAULT_TIME_SLOTS if item["type"] == "break"]
    assert len(bootstrap.DEFAULT_TIME_SLOTS) == 12
    assert [item["id"] for item in classes] == ["1", "2", "3", "4", "5", "6", "7", "8"]
    assert {item["id"] for item in breaks} == {"break1", "lunch1", "lunch2", "break2"}


def test_seed_only_fills_an_empty_table(db_session):
    # the fixture already seeded the defaults
    assert bootstrap.seed_default_time_slots(db_session) == 0

    db_session.query(TimeSlot).delete()
    db_session.commit()
    assert bootstrap.seed_default_time_slots(db_session) == 12

    lunch = db_session.get(TimeSlot, "lunch1")
    assert lunch.type is TimeSlotType.break_
    assert len(db_session.execute(select(TimeSlot)).scalars().all()) == 12


def test_runtime_schema_can_skip_every_step(monkeypatch):
    calls = []
    monkeypatch.setattr(bootstrap.Base.metadata, "create_all", lambda bind: calls.append("create"))
    monkeypatch.setattr(bootstrap, "seed_default_time_slots", lambda db: calls.append("seed") or 0)

    bootstrap.ensure_runtime_schema(create_tables=False, seed_time_slots=False)
    assert calls == []

    bootstrap.ensure_runtime_schema()
    assert calls == ["create", "seed"]
