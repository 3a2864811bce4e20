"""
Classroom service - persistence for classroom definitions.
"""
from typing import Any, Dict
from app.models.classroom import Classroom
from app.services.crud_service import CrudService


class ClassroomService(CrudService[Classroom]):
    """Classroom CRUD with the age band re-checked after partial updates."""
    
    model = Classroom
    
    def validate_changes(self, record: Classroom, changes: Dict[str, Any]) -> None:
        min_age = changes.get("min_age_months", record.min_age_months)
        max_age = changes.get("max_age_months", record.max_age_months)
        if min_age >= max_age:
            raise ValueError(
                f"minAgeMonths ({min_age}) must be less than maxAgeMonths ({max_age})"
            )
