"""
Classroom SQLAlchemy model.
Stores an age-banded classroom definition.
"""
from sqlalchemy import Column, Integer, String, CheckConstraint
from app.database import Base


class Classroom(Base):
    """
    Classroom table model.
    
    A classroom accepts children whose age in months falls in the half-open
    band [min_age_months, max_age_months). Children are never linked to a
    classroom in the database; membership is computed per target date.
    """
    __tablename__ = "classrooms"
    
    # Primary key
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    # Display
    name = Column(String(100), nullable=False)
    color = Column(String(200), nullable=False)
    ratio = Column(String(20), nullable=False)  # staff:child, display only
    
    # Age band in months
    min_age_months = Column(Integer, nullable=False)
    max_age_months = Column(Integer, nullable=False)
    
    # Seats
    capacity = Column(Integer, nullable=False)
    
    __table_args__ = (
        CheckConstraint('min_age_months >= 0', name='ck_classroom_min_age'),
        CheckConstraint('min_age_months < max_age_months', name='ck_classroom_band'),
        CheckConstraint('capacity > 0', name='ck_classroom_capacity'),
    )
    
    def __repr__(self):
        return (
            f"<Classroom(id={self.id}, name={self.name}, "
            f"band=[{self.min_age_months}, {self.max_age_months}), capacity={self.capacity})>"
        )
