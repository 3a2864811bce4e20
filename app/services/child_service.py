"""
Child service - persistence for child records.
"""
from app.models.child import Child
from app.services.crud_service import CrudService


class ChildService(CrudService[Child]):
    """Child CRUD. Children carry no classroom; placement is always computed."""
    
    model = Child
