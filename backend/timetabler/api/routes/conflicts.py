from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timetabler.api.deps import get_db
from timetabler.schemas.conflict import AutoResolveReport, ConflictDetail, ConflictReport, ResolveConflictRequest
from timetabler.services import timetable_service

router = APIRouter()


@router.get("/", response_model=ConflictReport)
def list_conflicts(db: Session = Depends(get_db)) -> ConflictReport:
    return timetable_service.conflict_report(db)


@router.post("/scan", response_model=ConflictReport)
def scan_conflicts(db: Session = Depends(get_db)) -> ConflictReport:
    return timetable_service.conflict_report(db)


@router.post("/auto-resolve", response_model=AutoResolveReport)
def auto_resolve_conflicts(db: Session = Depends(get_db)) -> AutoResolveReport:
    return timetable_service.auto_resolve_conflicts(db)


@router.post("/{conflict_id}/resolve", response_model=ConflictReport)
def resolve_conflict(
    conflict_id: str,
    request: ResolveConflictRequest | None = None,
    db: Session = Depends(get_db),
) -> ConflictReport:
    assignment_id = request.assignment_id if request else None
    return timetable_service.resolve_conflict(db, conflict_id, assignment_id)


@router.post("/{conflict_id}/ignore", response_model=ConflictDetail)
def ignore_conflict(conflict_id: str, db: Session = Depends(get_db)) -> ConflictDetail:
    return timetable_service.ignore_conflict(db, conflict_id)
