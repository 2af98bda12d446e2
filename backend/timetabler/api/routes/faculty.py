from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from timetabler.api.deps import get_db
from timetabler.models.faculty import Faculty
from timetabler.schemas.faculty import FacultyCreate, FacultyOut, FacultyUpdate

router = APIRouter()


@router.get("/", response_model=list[FacultyOut])
def list_faculty(db: Session = Depends(get_db)) -> list[FacultyOut]:
    return list(db.execute(select(Faculty).order_by(Faculty.created_at, Faculty.id)).scalars())


@router.post("/", response_model=FacultyOut, status_code=status.HTTP_201_CREATED)
def create_faculty(payload: FacultyCreate, db: Session = Depends(get_db)) -> FacultyOut:
    if db.get(Faculty, payload.id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Faculty id already exists")
    member = Faculty(**payload.model_dump())
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@router.put("/{faculty_id}", response_model=FacultyOut)
def update_faculty(faculty_id: str, payload: FacultyUpdate, db: Session = Depends(get_db)) -> FacultyOut:
    member = db.get(Faculty, faculty_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(member, key, value)
    db.commit()
    db.refresh(member)
    return member


@router.delete("/{faculty_id}")
def delete_faculty(faculty_id: str, db: Session = Depends(get_db)) -> dict:
    member = db.get(Faculty, faculty_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty not found")
    db.delete(member)
    db.commit()
    return {"success": True}
