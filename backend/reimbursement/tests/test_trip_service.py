"""
Tests for trip save and the toll learning it triggers.
"""
from datetime import date
from decimal import Decimal

import pytest

from reimbursement.core.exceptions import ExternalFailure, ValidationFailure
from reimbursement.models.trip import MealType
from reimbursement.schemas.report import PeriodFilter
from reimbursement.schemas.trip import TripCreate, MealEntry
from reimbursement.schemas.warning import WarningKind
from reimbursement.services.toll_booth_registry import TollBoothRegistry
from reimbursement.services.trip_service import save_trip, update_trip, load_registry


class FlakyTollStore:
    """Delegates to a real store but fails toll booth writes after ``ok`` successes."""

    def __init__(self, store, ok=0):
        self.store = store
        self.ok = ok

    async def save_trip(self, trip_in):
        return await self.store.save_trip(trip_in)

    async def list_toll_booths(self):
        return await self.store.list_toll_booths()

    async def upsert_toll_booth(self, record):
        if self.ok <= 0:
            raise ExternalFailure("toll_booths table locked")
        self.ok -= 1
        return await self.store.upsert_toll_booth(record)


def trip_data(person, vehicle, **overrides):
    data = dict(
        person_id=person.id,
        vehicle_id=vehicle.id,
        date=date(2026, 3, 5),
        origin="Treviso",
        destination="Vicenza",
        distance_km=Decimal("50"),
    )
    data.update(overrides)
    return TripCreate(**data)


@pytest.mark.asyncio
async def test_save_trip_persists_meals(store, person, vehicle):
    registry = TollBoothRegistry(store, strict=False)
    trip_in = trip_data(person, vehicle, meals=[
        MealEntry(meal_type=MealType.PRANZO, amount=Decimal("12.00")),
        MealEntry(meal_type=MealType.CENA, amount=Decimal("20.00")),
    ])

    result = await save_trip(store, registry, trip_in)

    assert result.trip.id is not None
    assert [m.meal_type for m in result.trip.meals] == [MealType.PRANZO, MealType.CENA]
    assert result.warnings == []


@pytest.mark.asyncio
async def test_save_trip_learns_outbound_and_return_legs(store, person, vehicle):
    registry = TollBoothRegistry(store, strict=False)
    trip_in = trip_data(
        person, vehicle,
        is_round_trip=True,
        has_toll=True,
        toll_entry_station="Treviso Nord",
        toll_exit_station="Vicenza Est",
        toll_amount=Decimal("5.00"),
        return_toll_entry_station="Vicenza Est",
        return_toll_exit_station="Treviso Nord",
        return_toll_amount=Decimal("5.20"),
    )

    await save_trip(store, registry, trip_in)

    assert registry.lookup("Treviso Nord", "Vicenza Est").amount == Decimal("5.00")
    assert registry.lookup("Vicenza Est", "Treviso Nord").amount == Decimal("5.20")
    assert len(await store.list_toll_booths()) == 2


@pytest.mark.asyncio
async def test_round_trip_without_return_stations_learns_outbound_only(store, person, vehicle):
    registry = TollBoothRegistry(store, strict=False)
    trip_in = trip_data(
        person, vehicle,
        is_round_trip=True,
        has_toll=True,
        toll_entry_station="Treviso Nord",
        toll_exit_station="Vicenza Est",
        toll_amount=Decimal("5.00"),
    )

    await save_trip(store, registry, trip_in)
    await save_trip(store, registry, trip_in)

    booths = await store.list_toll_booths()
    assert len(booths) == 1
    assert booths[0].usage_count == 2


@pytest.mark.asyncio
async def test_trip_without_toll_flag_learns_nothing(store, person, vehicle):
    registry = TollBoothRegistry(store, strict=False)
    trip_in = trip_data(
        person, vehicle,
        toll_entry_station="Treviso Nord",
        toll_exit_station="Vicenza Est",
        toll_amount=Decimal("5.00"),
    )

    await save_trip(store, registry, trip_in)

    assert await store.list_toll_booths() == []


@pytest.mark.asyncio
async def test_toll_failure_does_not_block_trip(store, person, vehicle):
    flaky = FlakyTollStore(store, ok=1)
    registry = TollBoothRegistry(flaky, strict=False)
    trip_in = trip_data(
        person, vehicle,
        is_round_trip=True,
        has_toll=True,
        toll_entry_station="Treviso Nord",
        toll_exit_station="Vicenza Est",
        toll_amount=Decimal("5.00"),
        return_toll_entry_station="Vicenza Est",
        return_toll_exit_station="Treviso Nord",
        return_toll_amount=Decimal("5.20"),
    )

    result = await save_trip(flaky, registry, trip_in)

    assert result.trip.id is not None
    assert len(result.warnings) == 1
    assert result.warnings[0].kind == WarningKind.TOLL_LEARNING
    assert result.warnings[0].trip_id == result.trip.id
    # The outbound leg written before the failure is kept
    booths = await store.list_toll_booths()
    assert [(b.entry_station, b.exit_station) for b in booths] == [("Treviso Nord", "Vicenza Est")]


@pytest.mark.asyncio
async def test_strict_mode_rejects_before_saving(store, person, vehicle):
    registry = TollBoothRegistry(store, strict=True)
    trip_in = trip_data(person, vehicle, has_toll=True, toll_entry_station="", toll_amount=Decimal("5.00"))

    with pytest.raises(ValidationFailure):
        await save_trip(store, registry, trip_in)

    period = PeriodFilter(person_id=person.id, date_from=date(2026, 1, 1), date_to=date(2026, 12, 31))
    assert await store.list_trips(period) == []


class UnreadableBoothsStore(FlakyTollStore):
    """Toll booths cannot be read, but can still be written."""

    async def list_toll_booths(self):
        raise ExternalFailure("toll_booths unreadable")


@pytest.mark.asyncio
async def test_unreadable_booths_give_empty_registry_and_warning(store):
    registry, warnings = await load_registry(UnreadableBoothsStore(store, ok=5))

    assert registry.booths == []
    assert [w.kind for w in warnings] == [WarningKind.TOLL_LEARNING]


@pytest.mark.asyncio
async def test_empty_registry_after_read_failure_still_merges_with_stored_booth(store, person, vehicle):
    trip_in = trip_data(
        person, vehicle,
        has_toll=True,
        toll_entry_station="Treviso Nord",
        toll_exit_station="Vicenza Est",
        toll_amount=Decimal("5.00"),
    )
    await save_trip(store, TollBoothRegistry(store, strict=False), trip_in)

    unreadable = UnreadableBoothsStore(store, ok=5)
    registry, _ = await load_registry(unreadable)
    result = await save_trip(unreadable, registry, trip_in.model_copy(update={"toll_amount": Decimal("5.30")}))

    assert result.trip.id is not None
    booths = await store.list_toll_booths()
    assert len(booths) == 1
    assert booths[0].amount == Decimal("5.30")
    assert booths[0].usage_count == 2


@pytest.mark.asyncio
async def test_update_trip_relearns_toll_and_replaces_meals(store, person, vehicle):
    registry = TollBoothRegistry(store, strict=False)
    trip_in = trip_data(
        person, vehicle,
        has_toll=True,
        toll_entry_station="Treviso Nord",
        toll_exit_station="Vicenza Est",
        toll_amount=Decimal("5.00"),
        meals=[MealEntry(meal_type=MealType.PRANZO, amount=Decimal("12.00"))],
    )
    saved = await save_trip(store, registry, trip_in)

    edited = trip_in.model_copy(update={
        "toll_amount": Decimal("5.60"),
        "meals": [MealEntry(meal_type=MealType.CENA, amount=Decimal("18.00"))],
    })
    result = await update_trip(store, registry, saved.trip.id, edited)

    assert result.trip.id == saved.trip.id
    assert result.trip.toll_amount == Decimal("5.60")
    assert [(m.meal_type, m.amount) for m in result.trip.meals] == [(MealType.CENA, Decimal("18.00"))]
    booth = registry.lookup("treviso nord", "vicenza est")
    assert booth.amount == Decimal("5.60")
    assert booth.usage_count == 2

    period = PeriodFilter(person_id=person.id, date_from=date(2026, 3, 1), date_to=date(2026, 3, 31))
    trips = await store.list_trips(period)
    assert len(trips) == 1
    assert [m.amount for m in trips[0].meals] == [Decimal("18.00")]


@pytest.mark.asyncio
async def test_update_unknown_trip_returns_none(store, person, vehicle):
    registry = TollBoothRegistry(store, strict=False)
    trip_in = trip_data(
        person, vehicle,
        has_toll=True,
        toll_entry_station="Treviso Nord",
        toll_exit_station="Vicenza Est",
        toll_amount=Decimal("5.00"),
    )

    assert await update_trip(store, registry, 4242, trip_in) is None
    assert await store.list_toll_booths() == []
