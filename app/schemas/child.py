"""
Child Pydantic schemas for request/response validation.
"""
from pydantic import Field
from typing import Optional
from datetime import date
from app.schemas.common import CamelModel, PatchModel


class ChildBase(CamelModel):
    """Fields shared by child payloads and records."""
    name: str = Field(..., min_length=1, max_length=100)
    birth_date: date = Field(..., description="Birth date, YYYY-MM-DD")
    enrollment_date: date = Field(..., description="Enrollment date, YYYY-MM-DD")


class ChildCreate(ChildBase):
    """Request body for creating a child."""
    pass


class ChildUpdate(PatchModel):
    """Partial child update."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    birth_date: Optional[date] = None
    enrollment_date: Optional[date] = None


class ChildRecord(ChildBase):
    """Stored child."""
    id: int
