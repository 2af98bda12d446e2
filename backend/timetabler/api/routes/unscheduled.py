from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from timetabler.api.deps import get_db
from timetabler.core.config import get_settings
from timetabler.schemas.generator import RetryUnscheduledResponse
from timetabler.schemas.timetable import UnscheduledItem
from timetabler.services import timetable_service

router = APIRouter()


@router.get("/", response_model=list[UnscheduledItem])
def list_unscheduled(db: Session = Depends(get_db)) -> list[UnscheduledItem]:
    return timetable_service.list_unscheduled(db)


@router.post("/{item_id}/retry", response_model=RetryUnscheduledResponse)
def retry_unscheduled(item_id: str, db: Session = Depends(get_db)) -> RetryUnscheduledResponse:
    rng = timetable_service.make_rng(get_settings().scheduler_random_seed)
    return timetable_service.retry_unscheduled(db, item_id, rng)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def dismiss_unscheduled(item_id: str, db: Session = Depends(get_db)) -> None:
    timetable_service.dismiss_unscheduled(db, item_id)
