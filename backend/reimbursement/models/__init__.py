"""Models package - Import all models for SQLAlchemy registration."""
from reimbursement.models.person import Person
from reimbursement.models.vehicle import Vehicle
from reimbursement.models.trip import Trip, TripMeal, TripRole, MealType
from reimbursement.models.expense import TripExpense, ExpenseType
from reimbursement.models.accommodation import Accommodation
from reimbursement.models.toll_booth import TollBooth

__all__ = [
    "Person",
    "Vehicle",
    "Trip",
    "TripMeal",
    "TripRole",
    "MealType",
    "TripExpense",
    "ExpenseType",
    "Accommodation",
    "TollBooth",
]
