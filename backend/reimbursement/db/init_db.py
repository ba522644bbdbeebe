"""
Database initialization script.
"""
import asyncio
from reimbursement.db.session import init_db

# Import all models so SQLAlchemy can register them
from reimbursement.models import (  # noqa: F401
    Person, Vehicle, Trip, TripMeal, TripExpense, Accommodation, TollBooth
)

if __name__ == "__main__":
    print("Initializing database...")
    asyncio.run(init_db())
    print("Database initialized successfully!")
