"""
Person model for staff members entitled to reimbursement.
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from reimbursement.db.base import BaseModel


class Person(BaseModel):
    """A staff member. General roles are flags; each trip records its own role."""
    __tablename__ = "people"
    
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False, index=True)
    is_docente = Column(Boolean, default=False, nullable=False)
    is_amministratore = Column(Boolean, default=False, nullable=False)
    is_dipendente = Column(Boolean, default=False, nullable=False)
    email = Column(String(100), nullable=True)
    phone = Column(String(30), nullable=True)
    home_address = Column(String(255), nullable=True)
    
    # Relationships
    vehicles = relationship("Vehicle", back_populates="owner", cascade="all, delete-orphan")
    trips = relationship("Trip", back_populates="person", cascade="all, delete-orphan")
    expenses = relationship("TripExpense", back_populates="person", cascade="all, delete-orphan")
    accommodations = relationship("Accommodation", back_populates="person", cascade="all, delete-orphan")
