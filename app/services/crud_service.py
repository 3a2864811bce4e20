"""
Generic persistence service - list/get/create/update/delete for one table.
"""
from sqlalchemy.orm import Session
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
import logging

from app.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CrudService(Generic[ModelT]):
    """
    Single-record operations keyed by integer id.
    
    Every write commits on its own; a failed write is rolled back and the
    error propagates to the caller.
    """
    
    model: Type[ModelT]
    
    def __init__(self, db: Session):
        self.db = db
    
    @property
    def label(self) -> str:
        return self.model.__name__
    
    def list_all(self) -> List[ModelT]:
        """All records in id order."""
        return self.db.query(self.model).order_by(self.model.id).all()
    
    def get(self, record_id: int) -> Optional[ModelT]:
        """Record by id, or None if absent."""
        return self.db.get(self.model, record_id)
    
    def create(self, data: Dict[str, Any]) -> ModelT:
        """Insert a record and return it with its assigned id."""
        record = self.model(**data)
        self.db.add(record)
        self._commit()
        self.db.refresh(record)
        logger.info("Created %s id=%s", self.label, record.id)
        return record
    
    def update(self, record_id: int, changes: Dict[str, Any]) -> Optional[ModelT]:
        """
        Apply a partial update.
        
        Returns:
            The updated record, or None if no record has this id
        """
        record = self.get(record_id)
        if record is None:
            return None
        
        self.validate_changes(record, changes)
        for key, value in changes.items():
            setattr(record, key, value)
        
        if changes:
            self._commit()
            self.db.refresh(record)
            logger.info("Updated %s id=%s fields=%s", self.label, record_id, sorted(changes))
        return record
    
    def delete(self, record_id: int) -> bool:
        """Delete by id; True if a record existed and was removed."""
        record = self.get(record_id)
        if record is None:
            return False
        self.db.delete(record)
        self._commit()
        logger.info("Deleted %s id=%s", self.label, record_id)
        return True
    
    def validate_changes(self, record: ModelT, changes: Dict[str, Any]) -> None:
        """Hook for checks on the merged record; raise ValueError to reject."""
    
    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Commit failed for %s", self.label)
            raise
