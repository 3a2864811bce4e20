"""
Classroom Pydantic schemas for request/response validation.
"""
from pydantic import Field, model_validator
from typing import Optional
from app.schemas.common import CamelModel, PatchModel


class ClassroomBase(CamelModel):
    """Fields shared by classroom payloads and records."""
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(..., min_length=1, max_length=200, description="Display color token")
    min_age_months: int = Field(..., ge=0, description="Youngest age accepted, inclusive")
    max_age_months: int = Field(..., gt=0, description="Age at which children move up, exclusive")
    capacity: int = Field(..., gt=0, description="Number of seats")
    ratio: str = Field(..., min_length=1, max_length=20, description="Staff:child ratio, e.g. 1:4")


class ClassroomCreate(ClassroomBase):
    """Request body for creating a classroom."""
    
    @model_validator(mode="after")
    def check_age_band(self):
        if self.min_age_months >= self.max_age_months:
            raise ValueError("minAgeMonths must be less than maxAgeMonths")
        return self


class ClassroomUpdate(PatchModel):
    """Partial classroom update; the merged record is re-checked by the service."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, min_length=1, max_length=200)
    min_age_months: Optional[int] = Field(None, ge=0)
    max_age_months: Optional[int] = Field(None, gt=0)
    capacity: Optional[int] = Field(None, gt=0)
    ratio: Optional[str] = Field(None, min_length=1, max_length=20)


class ClassroomRecord(ClassroomBase):
    """Stored classroom."""
    id: int
