"""
Pydantic schemas for documented expenses and accommodations.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date
from decimal import Decimal
from reimbursement.models.expense import ExpenseType


class TripExpenseBase(BaseModel):
    """Base documented expense schema."""
    person_id: int
    trip_id: Optional[int] = None
    date: date
    expense_type: ExpenseType = ExpenseType.ALTRO
    description: Optional[str] = None
    from_location: Optional[str] = None
    to_location: Optional[str] = None
    amount: Decimal = Field(ge=0)
    notes: Optional[str] = None


class TripExpenseCreate(TripExpenseBase):
    """Schema for expense creation."""
    pass


class TripExpenseRead(TripExpenseBase):
    """Schema for expense response."""
    id: int
    
    class Config:
        from_attributes = True


class AccommodationBase(BaseModel):
    """Base accommodation schema."""
    person_id: int
    date_from: date
    date_to: date
    location: Optional[str] = None
    amount: Decimal = Field(ge=0)
    notes: Optional[str] = None
    
    @model_validator(mode="after")
    def check_dates(self):
        """A stay cannot end before it starts."""
        if self.date_to < self.date_from:
            raise ValueError("date_to must not be before date_from")
        return self


class AccommodationCreate(AccommodationBase):
    """Schema for accommodation creation."""
    pass


class AccommodationRead(AccommodationBase):
    """Schema for accommodation response."""
    id: int
    
    class Config:
        from_attributes = True
