"""
Trip model for reimbursable journeys.
"""
from sqlalchemy import Column, String, Date, Boolean, Numeric, Enum as SQLEnum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from reimbursement.db.base import BaseModel
import enum


class TripRole(str, enum.Enum):
    """Capacity in which a trip was made."""
    DOCENTE = "docente"
    AMMINISTRATORE = "amministratore"
    DIPENDENTE = "dipendente"


class MealType(str, enum.Enum):
    """Meal type enumeration."""
    PRANZO = "pranzo"
    CENA = "cena"


class Trip(BaseModel):
    """One person's travel on one date.

    Km, toll and meal amounts are never stored here: they are recomputed
    from the vehicle rate every time a report is built.
    """
    __tablename__ = "trips"
    
    person_id = Column(Integer, ForeignKey("people.id"), nullable=False, index=True)
    # No foreign key: a trip can outlive the vehicle it references
    vehicle_id = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    origin = Column(String(255), nullable=True)
    destination = Column(String(255), nullable=True)
    purpose = Column(Text, nullable=True)
    distance_km = Column(Numeric(10, 2), nullable=False)  # One-way distance
    is_round_trip = Column(Boolean, default=False, nullable=False)
    trip_role = Column(SQLEnum(TripRole, values_callable=lambda e: [m.value for m in e]), nullable=True)
    
    # Tolls
    has_toll = Column(Boolean, default=False, nullable=False)
    toll_entry_station = Column(String(100), nullable=True)
    toll_exit_station = Column(String(100), nullable=True)
    toll_amount = Column(Numeric(10, 2), nullable=True)
    return_toll_entry_station = Column(String(100), nullable=True)
    return_toll_exit_station = Column(String(100), nullable=True)
    return_toll_amount = Column(Numeric(10, 2), nullable=True)
    
    # Legacy single meal, superseded by TripMeal rows
    has_meal = Column(Boolean, default=False, nullable=False)
    meal_type = Column(SQLEnum(MealType, values_callable=lambda e: [m.value for m in e]), nullable=True)
    meal_amount = Column(Numeric(10, 2), nullable=True)
    
    # Relationships
    person = relationship("Person", back_populates="trips")
    meals = relationship(
        "TripMeal",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="TripMeal.id",
        lazy="selectin"
    )


class TripMeal(BaseModel):
    """A meal bought during a trip."""
    __tablename__ = "trip_meals"
    
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    meal_type = Column(SQLEnum(MealType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    
    # Relationships
    trip = relationship("Trip", back_populates="meals")
