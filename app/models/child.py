"""
Child SQLAlchemy model.
"""
from sqlalchemy import Column, Integer, String, Date
from app.database import Base


class Child(Base):
    """
    Child table model.
    
    Only the birth date drives classroom placement; enrollment date is kept
    for the administrator's reference.
    """
    __tablename__ = "children"
    
    # Primary key
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    name = Column(String(100), nullable=False)
    
    # Temporal
    birth_date = Column(Date, nullable=False, index=True)
    enrollment_date = Column(Date, nullable=False)
    
    def __repr__(self):
        return f"<Child(id={self.id}, name={self.name}, birth_date={self.birth_date})>"
