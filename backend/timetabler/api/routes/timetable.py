from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timetabler.api.deps import get_db
from timetabler.core.config import get_settings
from timetabler.schemas.generator import (
    DashboardOut,
    GenerateTimetableRequest,
    GenerateTimetableResponse,
    TimetableOut,
)
from timetabler.schemas.settings import DAYS
from timetabler.services import timetable_service
from timetabler.services.timetable_store import load_state

router = APIRouter()


@router.post("/timetable/generate", response_model=GenerateTimetableResponse)
def generate_timetable(
    payload: GenerateTimetableRequest | None = None,
    db: Session = Depends(get_db),
) -> GenerateTimetableResponse:
    seed = payload.random_seed if payload and payload.random_seed is not None else get_settings().scheduler_random_seed
    return timetable_service.generate_timetable(db, timetable_service.make_rng(seed))


@router.get("/timetable", response_model=TimetableOut)
def get_timetable(db: Session = Depends(get_db)) -> TimetableOut:
    state = load_state(db)
    return TimetableOut(days=list(DAYS), class_slots=state.class_slots(), timetable=state.timetable)


@router.get("/timetable/dashboard", response_model=DashboardOut)
def get_dashboard(db: Session = Depends(get_db)) -> DashboardOut:
    return timetable_service.dashboard(db)
