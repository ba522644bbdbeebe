"""
Tests for the legacy meal migration.
"""
from datetime import date
from decimal import Decimal

import pytest

from reimbursement.db.migrations.migrate_legacy_meals import migrate
from reimbursement.models import Trip, TripMeal, MealType
from reimbursement.schemas.report import PeriodFilter
from reimbursement.services import calculator


@pytest.mark.asyncio
async def test_legacy_meals_become_meal_rows(session, store, person, vehicle):
    legacy = Trip(person_id=person.id, vehicle_id=vehicle.id, date=date(2026, 3, 5),
                  distance_km=Decimal("20"), has_meal=True, meal_type=MealType.CENA,
                  meal_amount=Decimal("14.00"))
    modern = Trip(person_id=person.id, vehicle_id=vehicle.id, date=date(2026, 3, 6),
                  distance_km=Decimal("20"), has_meal=True, meal_amount=Decimal("14.00"))
    modern.meals = [TripMeal(meal_type=MealType.PRANZO, amount=Decimal("11.00"))]
    session.add_all([legacy, modern])
    await session.commit()

    created = await migrate(session)

    assert created == 1
    trips = await store.list_trips(PeriodFilter(person_id=person.id,
                                                date_from=date(2026, 3, 1), date_to=date(2026, 3, 31)))
    assert [m.meal_type for m in trips[0].meals] == [MealType.CENA]
    # Totals are unchanged by the migration
    assert [calculator.meal_contribution(t) for t in trips] == [Decimal("14.00"), Decimal("11.00")]


@pytest.mark.asyncio
async def test_migration_is_repeatable(session, person, vehicle):
    session.add(Trip(person_id=person.id, vehicle_id=vehicle.id, date=date(2026, 3, 5),
                     distance_km=Decimal("20"), has_meal=True, meal_amount=Decimal("9.00")))
    await session.commit()

    assert await migrate(session) == 1
    assert await migrate(session) == 0
