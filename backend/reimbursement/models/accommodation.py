"""
Accommodation (lodging) model.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from reimbursement.db.base import BaseModel


class Accommodation(BaseModel):
    """A lodging stay; may span the boundary of a report period."""
    __tablename__ = "accommodations"
    
    person_id = Column(Integer, ForeignKey("people.id"), nullable=False, index=True)
    date_from = Column(Date, nullable=False, index=True)
    date_to = Column(Date, nullable=False, index=True)
    location = Column(String(255), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)
    
    # Relationships
    person = relationship("Person", back_populates="accommodations")
