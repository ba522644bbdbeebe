"""
Data store backed by an async SQLAlchemy session.

Every method returns pydantic copies rather than ORM rows, so callers can
hold on to results after the session is gone. Database errors surface as
ExternalFailure and are never retried here.
"""
import logging
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from reimbursement.core.exceptions import ExternalFailure
from reimbursement.models.trip import Trip, TripMeal
from reimbursement.models.vehicle import Vehicle
from reimbursement.models.expense import TripExpense
from reimbursement.models.accommodation import Accommodation
from reimbursement.models.toll_booth import TollBooth
from reimbursement.schemas.trip import TripCreate, TripRead, VehicleRead
from reimbursement.schemas.expense import (
    TripExpenseCreate, TripExpenseRead, AccommodationCreate, AccommodationRead
)
from reimbursement.schemas.toll_booth import TollBoothRecord
from reimbursement.schemas.report import PeriodFilter

logger = logging.getLogger(__name__)


class SqlAlchemyStore:
    """Reads and writes the reimbursement tables through one AsyncSession."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def list_trips(self, filter: PeriodFilter) -> List[TripRead]:
        """Trips of a person dated within the window, inclusive."""
        stmt = select(Trip).where(
            Trip.person_id == filter.person_id,
            Trip.date >= filter.date_from,
            Trip.date <= filter.date_to
        ).order_by(Trip.date, Trip.id)
        try:
            result = await self.session.execute(stmt)
            trips = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list trips for person {filter.person_id}: {e}")
            raise ExternalFailure("Could not read trips") from e
        return [TripRead.model_validate(trip) for trip in trips]
    
    async def list_expenses(self, filter: PeriodFilter) -> List[TripExpenseRead]:
        """Documented expenses of a person dated within the window, inclusive."""
        stmt = select(TripExpense).where(
            TripExpense.person_id == filter.person_id,
            TripExpense.date >= filter.date_from,
            TripExpense.date <= filter.date_to
        ).order_by(TripExpense.date, TripExpense.id)
        try:
            result = await self.session.execute(stmt)
            expenses = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list expenses for person {filter.person_id}: {e}")
            raise ExternalFailure("Could not read expenses") from e
        return [TripExpenseRead.model_validate(expense) for expense in expenses]
    
    async def list_accommodations(self, filter: PeriodFilter) -> List[AccommodationRead]:
        """Stays of a person that overlap the window (not only those contained in it)."""
        stmt = select(Accommodation).where(
            Accommodation.person_id == filter.person_id,
            Accommodation.date_from <= filter.date_to,
            Accommodation.date_to >= filter.date_from
        ).order_by(Accommodation.date_from, Accommodation.id)
        try:
            result = await self.session.execute(stmt)
            accommodations = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list accommodations for person {filter.person_id}: {e}")
            raise ExternalFailure("Could not read accommodations") from e
        return [AccommodationRead.model_validate(a) for a in accommodations]
    
    async def get_vehicle(self, vehicle_id: int) -> Optional[VehicleRead]:
        """Vehicle by id, or None if it has been deleted."""
        try:
            vehicle = await self.session.get(Vehicle, vehicle_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load vehicle {vehicle_id}: {e}")
            raise ExternalFailure("Could not read vehicle") from e
        if vehicle is None:
            return None
        return VehicleRead.model_validate(vehicle)
    
    async def list_toll_booths(self) -> List[TollBoothRecord]:
        """All learned toll booths, most used first."""
        stmt = select(TollBooth).order_by(TollBooth.usage_count.desc(), TollBooth.id)
        try:
            result = await self.session.execute(stmt)
            booths = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list toll booths: {e}")
            raise ExternalFailure("Could not read toll booths") from e
        return [TollBoothRecord.model_validate(booth) for booth in booths]
    
    async def upsert_toll_booth(self, record: TollBoothRecord) -> TollBoothRecord:
        """
        Insert or update a toll booth and commit.
        
        A record without id is matched case-insensitively against existing
        pairs first, so a stale registry cache cannot create duplicates.
        """
        try:
            booth = None
            usage_count = record.usage_count
            if record.id is not None:
                booth = await self.session.get(TollBooth, record.id)
            if booth is None:
                result = await self.session.execute(
                    select(TollBooth).where(
                        func.lower(TollBooth.entry_station) == record.entry_station.lower(),
                        func.lower(TollBooth.exit_station) == record.exit_station.lower()
                    )
                )
                booth = result.scalars().first()
                if booth is not None:
                    # Caller did not know this pair yet: its uses add to the stored ones
                    usage_count = booth.usage_count + record.usage_count
            if booth is None:
                booth = TollBooth(
                    entry_station=record.entry_station,
                    exit_station=record.exit_station
                )
                self.session.add(booth)
            booth.amount = record.amount
            booth.usage_count = usage_count
            booth.last_used_at = record.last_used_at
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to save toll booth {record.entry_station} -> {record.exit_station}: {e}")
            raise ExternalFailure("Could not save toll booth") from e
        return TollBoothRecord.model_validate(booth)
    
    async def save_trip(self, trip_in: TripCreate) -> TripRead:
        """Insert a trip with its meals and commit."""
        data = trip_in.model_dump(exclude={"meals"})
        trip = Trip(**data)
        trip.meals = [TripMeal(meal_type=m.meal_type, amount=m.amount) for m in trip_in.meals]
        try:
            self.session.add(trip)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to save trip for person {trip_in.person_id}: {e}")
            raise ExternalFailure("Could not save trip") from e
        return TripRead.model_validate(trip)
    
    async def update_trip(self, trip_id: int, trip_in: TripCreate) -> Optional[TripRead]:
        """Overwrite a trip and replace its meals. None if the trip does not exist."""
        try:
            trip = await self.session.get(Trip, trip_id)
            if trip is None:
                return None
            for field, value in trip_in.model_dump(exclude={"meals"}).items():
                setattr(trip, field, value)
            # delete-orphan cascade removes the old meal rows
            trip.meals = [TripMeal(meal_type=m.meal_type, amount=m.amount) for m in trip_in.meals]
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to update trip {trip_id}: {e}")
            raise ExternalFailure("Could not update trip") from e
        return TripRead.model_validate(trip)
    
    async def save_expense(self, expense_in: TripExpenseCreate) -> TripExpenseRead:
        """Insert a documented expense and commit."""
        expense = TripExpense(**expense_in.model_dump())
        try:
            self.session.add(expense)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to save expense for person {expense_in.person_id}: {e}")
            raise ExternalFailure("Could not save expense") from e
        return TripExpenseRead.model_validate(expense)
    
    async def save_accommodation(self, accommodation_in: AccommodationCreate) -> AccommodationRead:
        """Insert an accommodation and commit."""
        accommodation = Accommodation(**accommodation_in.model_dump())
        try:
            self.session.add(accommodation)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to save accommodation for person {accommodation_in.person_id}: {e}")
            raise ExternalFailure("Could not save accommodation") from e
        return AccommodationRead.model_validate(accommodation)
