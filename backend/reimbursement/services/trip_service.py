"""
Trip service: persist a trip and teach the toll booth registry its fares.
"""
import logging
from typing import List, Optional, Tuple
from pydantic import BaseModel
from reimbursement.core.exceptions import ExternalFailure
from reimbursement.schemas.trip import TripCreate, TripRead
from reimbursement.schemas.warning import EngineWarning, WarningKind
from reimbursement.services.toll_booth_registry import TollBoothRegistry

logger = logging.getLogger(__name__)


class TripSaveResult(BaseModel):
    """Saved trip plus any toll learning warnings."""
    trip: TripRead
    warnings: List[EngineWarning] = []


async def load_registry(store) -> Tuple[TollBoothRegistry, List[EngineWarning]]:
    """
    Registry for a trip save. If the booths cannot be read the registry
    starts empty and a warning is returned; the store merges later writes
    with rows it already has.
    """
    try:
        return await TollBoothRegistry.load(store), []
    except ExternalFailure as e:
        logger.warning(f"Toll booths not loaded, learning with an empty cache: {e}")
        warning = EngineWarning(
            kind=WarningKind.TOLL_LEARNING,
            message="Known toll fares could not be read"
        )
        return TollBoothRegistry(store, booths=[]), [warning]


def _check_tolls(registry: TollBoothRegistry, trip_in: TripCreate) -> None:
    """Reject bad toll input before anything is written (strict mode only)."""
    if not registry.strict:
        return
    if trip_in.has_toll:
        registry.check_usage(trip_in.toll_entry_station, trip_in.toll_exit_station, trip_in.toll_amount)
    if trip_in.is_round_trip and (trip_in.return_toll_entry_station or trip_in.return_toll_exit_station
                                  or trip_in.return_toll_amount is not None):
        registry.check_usage(
            trip_in.return_toll_entry_station, trip_in.return_toll_exit_station, trip_in.return_toll_amount
        )


async def _learn_tolls(registry: TollBoothRegistry, trip: TripRead) -> List[EngineWarning]:
    """Record the outbound leg, then the return leg."""
    warnings = []
    if trip.has_toll:
        warning = await registry.record_usage(
            trip.toll_entry_station, trip.toll_exit_station, trip.toll_amount
        )
        if warning:
            warning.trip_id = trip.id
            warnings.append(warning)
    
    if trip.is_round_trip and trip.return_toll_entry_station and trip.return_toll_exit_station \
            and trip.return_toll_amount:
        warning = await registry.record_usage(
            trip.return_toll_entry_station, trip.return_toll_exit_station, trip.return_toll_amount
        )
        if warning:
            warning.trip_id = trip.id
            warnings.append(warning)
    return warnings


async def save_trip(store, registry: TollBoothRegistry, trip_in: TripCreate) -> TripSaveResult:
    """
    Save a trip, then record toll usage for the outbound and return legs.
    
    The trip is committed before the registry is touched, and the two legs
    are recorded one after the other. Registry failures come back as
    warnings; the trip stays saved.
    """
    _check_tolls(registry, trip_in)
    trip = await store.save_trip(trip_in)
    logger.info(f"Saved trip {trip.id} for person {trip.person_id} on {trip.date}")
    return TripSaveResult(trip=trip, warnings=await _learn_tolls(registry, trip))


async def update_trip(store, registry: TollBoothRegistry, trip_id: int, trip_in: TripCreate) -> Optional[TripSaveResult]:
    """
    Overwrite an existing trip and its meals, then learn its tolls again.
    
    Returns None when the trip does not exist.
    """
    _check_tolls(registry, trip_in)
    trip = await store.update_trip(trip_id, trip_in)
    if trip is None:
        return None
    logger.info(f"Updated trip {trip.id} for person {trip.person_id} on {trip.date}")
    return TripSaveResult(trip=trip, warnings=await _learn_tolls(registry, trip))
