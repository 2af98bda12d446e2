from datetime import date
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from timetabler.api.deps import get_db
from timetabler.schemas.conflict import ConflictExport
from timetabler.services import export as export_service
from timetabler.services import timetable_service
from timetabler.services.timetable_store import load_state

router = APIRouter()


def _attachment_header(filename: str) -> str:
    # latin-1 only in the plain parameter; the exact name travels in filename*
    fallback = "".join(ch if ch.isascii() and (ch.isalnum() or ch in "-_.") else "_" for ch in filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.get("/timetable")
def export_master_timetable(db: Session = Depends(get_db)) -> dict:
    return export_service.master_timetable(load_state(db))


@router.get("/conflicts", response_model=ConflictExport)
def export_conflicts(db: Session = Depends(get_db)) -> ConflictExport:
    return export_service.conflict_export(timetable_service.scan_conflicts(db))


@router.get("/all")
def export_all(db: Session = Depends(get_db)) -> dict:
    state = load_state(db)
    return export_service.full_export(state, timetable_service.scan_conflicts(db))


@router.get("/{view_type}")
def export_all_entity_timetables(view_type: str, db: Session = Depends(get_db)) -> dict:
    return export_service.bulk_timetables(load_state(db), view_type)


@router.get("/{view_type}/{entity_id}")
def export_entity_timetable(view_type: str, entity_id: str, db: Session = Depends(get_db)) -> Response:
    content = export_service.entity_timetable_csv(load_state(db), view_type, entity_id)
    filename = f"{view_type}-{entity_id}-timetable-{date.today().isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": _attachment_header(filename)},
    )
