"""
Models package initialization.
"""
from app.models.classroom import Classroom
from app.models.child import Child

__all__ = ["Classroom", "Child"]
