"""
Per-trip reimbursement amounts.

Pure functions over a trip and its vehicle. They accept pydantic schemas or
ORM rows alike since only attributes are read. Nothing computed here is
ever stored on the trip.
"""
from decimal import Decimal
from typing import Optional
from reimbursement.core.exceptions import ValidationFailure

ZERO = Decimal("0")


def _check_trip(trip) -> None:
    if trip.distance_km is None or trip.distance_km <= 0:
        raise ValidationFailure(f"Trip {getattr(trip, 'id', None)}: distance must be positive")
    for field in ("toll_amount", "return_toll_amount", "meal_amount"):
        value = getattr(trip, field, None)
        if value is not None and value < 0:
            raise ValidationFailure(f"Trip {getattr(trip, 'id', None)}: {field} must not be negative")


def effective_distance(trip) -> Decimal:
    """Distance actually driven: doubled for a round trip."""
    _check_trip(trip)
    distance = Decimal(trip.distance_km)
    return distance * 2 if trip.is_round_trip else distance


def km_reimbursement(trip, vehicle) -> Decimal:
    """Effective distance times the vehicle rate; zero when the vehicle is missing."""
    distance = effective_distance(trip)
    if vehicle is None:
        return ZERO
    return distance * Decimal(vehicle.reimbursement_rate_per_km)


def toll_contribution(trip) -> Decimal:
    """
    Outbound toll plus, for a round trip, the return toll.
    
    Without an explicit return amount the return leg costs the same as the
    outbound leg. A one-way trip is never doubled.
    """
    _check_trip(trip)
    if not trip.has_toll:
        return ZERO
    outbound = trip.toll_amount if trip.toll_amount is not None else ZERO
    if not trip.is_round_trip:
        return Decimal(outbound)
    if trip.return_toll_amount is not None:
        return_leg = trip.return_toll_amount
    else:
        return_leg = outbound
    return Decimal(outbound) + Decimal(return_leg)


def meal_contribution(trip) -> Decimal:
    """Sum of meal amounts; never scaled by round-trip status."""
    _check_trip(trip)
    meals = getattr(trip, "meals", None) or []
    if meals:
        total = ZERO
        for meal in meals:
            if meal.amount < 0:
                raise ValidationFailure(f"Trip {getattr(trip, 'id', None)}: meal amount must not be negative")
            total += Decimal(meal.amount)
        return total
    # Records saved before the meal list existed
    if getattr(trip, "has_meal", False) and getattr(trip, "meal_amount", None):
        return Decimal(trip.meal_amount)
    return ZERO


def trip_total(trip, vehicle) -> Decimal:
    """Km reimbursement plus tolls plus meals."""
    return km_reimbursement(trip, vehicle) + toll_contribution(trip) + meal_contribution(trip)


def vehicle_rate(vehicle) -> Optional[Decimal]:
    """Rate per km of a vehicle, or None when it no longer exists."""
    if vehicle is None:
        return None
    return Decimal(vehicle.reimbursement_rate_per_km)
