from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timetabler.api.deps import get_db
from timetabler.schemas.settings import SchedulingPreferences, SchedulingPreferencesUpdate
from timetabler.services.timetable_store import load_preferences, save_preferences

router = APIRouter()


@router.get("/settings/scheduling", response_model=SchedulingPreferences)
def get_scheduling_preferences(db: Session = Depends(get_db)) -> SchedulingPreferences:
    return load_preferences(db)


@router.put("/settings/scheduling", response_model=SchedulingPreferences)
def update_scheduling_preferences(
    payload: SchedulingPreferencesUpdate,
    db: Session = Depends(get_db),
) -> SchedulingPreferences:
    current = load_preferences(db)
    updated = current.model_copy(update=payload.model_dump(exclude_unset=True, exclude_none=True))
    return save_preferences(db, updated)
