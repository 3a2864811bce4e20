"""
Schemas package initialization.
"""
from app.schemas.common import (
    CamelModel,
    PatchModel,
    HealthResponse,
)
from app.schemas.classroom import (
    ClassroomCreate,
    ClassroomUpdate,
    ClassroomRecord,
)
from app.schemas.child import (
    ChildCreate,
    ChildUpdate,
    ChildRecord,
)

__all__ = [
    # Common
    "CamelModel",
    "PatchModel",
    "HealthResponse",
    # Classroom
    "ClassroomCreate",
    "ClassroomUpdate",
    "ClassroomRecord",
    # Child
    "ChildCreate",
    "ChildUpdate",
    "ChildRecord",
]
