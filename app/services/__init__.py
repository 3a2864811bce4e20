"""
Services package initialization.
"""
from app.services.crud_service import CrudService
from app.services.classroom_service import ClassroomService
from app.services.child_service import ChildService
from app.services.forecast_service import ForecastService

__all__ = [
    "CrudService",
    "ClassroomService",
    "ChildService",
    "ForecastService",
]
