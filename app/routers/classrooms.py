"""
Classroom API endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.classroom import ClassroomCreate, ClassroomUpdate, ClassroomRecord
from app.services.classroom_service import ClassroomService
from typing import List

router = APIRouter()


@router.get("", response_model=List[ClassroomRecord])
def list_classrooms(db: Session = Depends(get_db)):
    """List all classrooms."""
    return ClassroomService(db).list_all()


@router.get("/{classroom_id}", response_model=ClassroomRecord)
def get_classroom(classroom_id: int, db: Session = Depends(get_db)):
    """Get a single classroom by id."""
    classroom = ClassroomService(db).get(classroom_id)
    if classroom is None:
        raise HTTPException(status_code=404, detail="Classroom not found")
    return classroom


@router.post("", response_model=ClassroomRecord, status_code=201)
def create_classroom(payload: ClassroomCreate, db: Session = Depends(get_db)):
    """
    Create a classroom.
    
    - **minAgeMonths** / **maxAgeMonths**: half-open age band in months
    - **capacity**: seats, must be positive
    - **ratio**: staff to child ratio shown on the dashboard
    """
    return ClassroomService(db).create(payload.model_dump())


@router.patch("/{classroom_id}", response_model=ClassroomRecord)
def update_classroom(
    classroom_id: int,
    payload: ClassroomUpdate,
    db: Session = Depends(get_db)
):
    """Update some fields of a classroom; omitted fields are left unchanged."""
    try:
        classroom = ClassroomService(db).update(classroom_id, payload.changes())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    if classroom is None:
        raise HTTPException(status_code=404, detail="Classroom not found")
    return classroom


@router.delete("/{classroom_id}", status_code=204)
def delete_classroom(classroom_id: int, db: Session = Depends(get_db)):
    """Delete a classroom. Children are unaffected."""
    if not ClassroomService(db).delete(classroom_id):
        raise HTTPException(status_code=404, detail="Classroom not found")
    return Response(status_code=204)
