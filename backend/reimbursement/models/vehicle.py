"""
Vehicle model with its per-km reimbursement rate.
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, Integer
from sqlalchemy.orm import relationship
from reimbursement.db.base import BaseModel


class Vehicle(BaseModel):
    """Private vehicle used for work trips."""
    __tablename__ = "vehicles"
    
    owner_id = Column(Integer, ForeignKey("people.id"), nullable=False, index=True)
    make = Column(String(50), nullable=True)
    model = Column(String(50), nullable=True)
    plate = Column(String(20), nullable=True)
    reimbursement_rate_per_km = Column(Numeric(10, 4), nullable=False)  # Euro per km
    
    # Relationships
    owner = relationship("Person", back_populates="vehicles")
