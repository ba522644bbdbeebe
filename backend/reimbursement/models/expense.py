"""
Documented travel expense model (train, flight, taxi, parking...).
"""
from sqlalchemy import Column, String, Numeric, Date, Enum as SQLEnum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from reimbursement.db.base import BaseModel
import enum


class ExpenseType(str, enum.Enum):
    """Expense type enumeration."""
    TRENO = "treno"
    SUPPLEMENTO_TRENO = "supplemento_treno"
    AEREO = "aereo"
    TAXI = "taxi"
    PARCHEGGIO = "parcheggio"
    ALTRO = "altro"


class TripExpense(BaseModel):
    """An expense backed by a receipt, independent of a trip's toll/meal fields."""
    __tablename__ = "trip_expenses"
    
    person_id = Column(Integer, ForeignKey("people.id"), nullable=False, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="SET NULL"), nullable=True, index=True)
    date = Column(Date, nullable=False, index=True)
    expense_type = Column(
        SQLEnum(ExpenseType, values_callable=lambda e: [m.value for m in e]),
        default=ExpenseType.ALTRO,
        nullable=False
    )
    description = Column(Text, nullable=True)
    from_location = Column(String(255), nullable=True)  # Only meaningful for treno/aereo
    to_location = Column(String(255), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)
    
    # Relationships
    person = relationship("Person", back_populates="expenses")
