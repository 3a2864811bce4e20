"""
Routers package initialization.
"""
from app.routers import classrooms
from app.routers import children
from app.routers import forecast

__all__ = [
    "classrooms",
    "children",
    "forecast",
]
