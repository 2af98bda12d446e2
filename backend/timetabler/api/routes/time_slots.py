from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from timetabler.api.deps import get_db
from timetabler.models.time_slot import TimeSlot, TimeSlotType
from timetabler.schemas.settings import parse_time_to_minutes
from timetabler.schemas.time_slot import TimeSlotCreate, TimeSlotOut, TimeSlotUpdate

router = APIRouter()


@router.get("/", response_model=list[TimeSlotOut])
def list_time_slots(db: Session = Depends(get_db)) -> list[TimeSlotOut]:
    slots = db.execute(select(TimeSlot)).scalars().all()
    return sorted(slots, key=lambda slot: (parse_time_to_minutes(slot.start_time), slot.id))


@router.post("/", response_model=TimeSlotOut, status_code=status.HTTP_201_CREATED)
def create_time_slot(payload: TimeSlotCreate, db: Session = Depends(get_db)) -> TimeSlotOut:
    if db.get(TimeSlot, payload.id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Time slot id already exists")
    slot = TimeSlot(**{**payload.model_dump(), "type": TimeSlotType(payload.type)})
    db.add(slot)
    db.commit()
    db.refresh(slot)
    return slot


@router.put("/{slot_id}", response_model=TimeSlotOut)
def update_time_slot(slot_id: str, payload: TimeSlotUpdate, db: Session = Depends(get_db)) -> TimeSlotOut:
    slot = db.get(TimeSlot, slot_id)
    if slot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Time slot not found")

    merged = TimeSlotOut.model_validate(slot).model_dump()
    merged.update(payload.model_dump(exclude_unset=True, exclude_none=True))
    try:
        updated = TimeSlotOut.model_validate(merged)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    slot.start_time = updated.start_time
    slot.end_time = updated.end_time
    slot.label = updated.label
    slot.type = TimeSlotType(updated.type)
    db.commit()
    db.refresh(slot)
    return slot


@router.delete("/{slot_id}")
def delete_time_slot(slot_id: str, db: Session = Depends(get_db)) -> dict:
    slot = db.get(TimeSlot, slot_id)
    if slot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Time slot not found")
    db.delete(slot)
    db.commit()
    return {"success": True}
