"""
Child API endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.child import ChildCreate, ChildUpdate, ChildRecord
from app.services.child_service import ChildService
from typing import List

router = APIRouter()


@router.get("", response_model=List[ChildRecord])
def list_children(db: Session = Depends(get_db)):
    """List all children."""
    return ChildService(db).list_all()


@router.get("/{child_id}", response_model=ChildRecord)
def get_child(child_id: int, db: Session = Depends(get_db)):
    """Get a single child by id."""
    child = ChildService(db).get(child_id)
    if child is None:
        raise HTTPException(status_code=404, detail="Child not found")
    return child


@router.post("", response_model=ChildRecord, status_code=201)
def create_child(payload: ChildCreate, db: Session = Depends(get_db)):
    """Create a child record. Dates use YYYY-MM-DD."""
    return ChildService(db).create(payload.model_dump())


@router.patch("/{child_id}", response_model=ChildRecord)
def update_child(child_id: int, payload: ChildUpdate, db: Session = Depends(get_db)):
    """Update some fields of a child; omitted fields are left unchanged."""
    child = ChildService(db).update(child_id, payload.changes())
    if child is None:
        raise HTTPException(status_code=404, detail="Child not found")
    return child


@router.delete("/{child_id}", status_code=204)
def delete_child(child_id: int, db: Session = Depends(get_db)):
    """Delete a child record."""
    if not ChildService(db).delete(child_id):
        raise HTTPException(status_code=404, detail="Child not found")
    return Response(status_code=204)
