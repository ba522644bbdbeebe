"""
Migration script to move legacy single-meal fields into trip_meals rows.
Trips saved before the meal list existed carry has_meal/meal_type/meal_amount
on the trip itself; after this runs they have an equivalent TripMeal row.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from reimbursement.models.trip import Trip, TripMeal, MealType


async def migrate(db: AsyncSession) -> int:
    """Create a TripMeal for every legacy meal not yet migrated. Returns rows created."""
    result = await db.execute(
        select(Trip).where(
            Trip.has_meal.is_(True),
            Trip.meal_amount.is_not(None)
        ).execution_options(populate_existing=True)
    )
    created = 0
    try:
        for trip in result.scalars().all():
            # Trips that already have a meal list were saved by the new form
            if trip.meals:
                continue
            trip.meals.append(TripMeal(
                meal_type=trip.meal_type or MealType.PRANZO,
                amount=trip.meal_amount
            ))
            created += 1
        await db.commit()
    except Exception as e:
        await db.rollback()
        print(f"Migration failed: {e}")
        raise
    print(f"Migrated {created} legacy meals")
    return created
