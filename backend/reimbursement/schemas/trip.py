"""
Pydantic schemas for Trip, TripMeal and Vehicle entities.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date
from decimal import Decimal
from reimbursement.models.trip import TripRole, MealType


class VehicleRead(BaseModel):
    """Vehicle as seen by the calculator."""
    id: int
    owner_id: int
    make: Optional[str] = None
    model: Optional[str] = None
    plate: Optional[str] = None
    reimbursement_rate_per_km: Decimal = Field(gt=0)  # Euro per km
    
    class Config:
        from_attributes = True


class MealEntry(BaseModel):
    """A single meal; the form allows at most one pranzo and one cena per trip."""
    meal_type: MealType
    amount: Decimal = Field(ge=0)
    
    class Config:
        from_attributes = True


class TripBase(BaseModel):
    """Base trip schema."""
    person_id: int
    vehicle_id: int
    date: date
    origin: Optional[str] = None
    destination: Optional[str] = None
    purpose: Optional[str] = None
    distance_km: Decimal = Field(gt=0)  # One-way distance
    is_round_trip: bool = False
    trip_role: Optional[TripRole] = None
    
    has_toll: bool = False
    toll_entry_station: Optional[str] = None
    toll_exit_station: Optional[str] = None
    toll_amount: Optional[Decimal] = Field(default=None, ge=0)
    return_toll_entry_station: Optional[str] = None
    return_toll_exit_station: Optional[str] = None
    return_toll_amount: Optional[Decimal] = Field(default=None, ge=0)
    
    # Legacy single meal, read only when meals is empty
    has_meal: bool = False
    meal_type: Optional[MealType] = None
    meal_amount: Optional[Decimal] = Field(default=None, ge=0)
    
    meals: List[MealEntry] = []


class TripCreate(TripBase):
    """Schema for trip creation."""
    pass


class TripRead(TripBase):
    """Schema for trip response."""
    id: int
    
    class Config:
        from_attributes = True
