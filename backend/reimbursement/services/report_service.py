"""
Period report service: aggregates trips, documented expenses and lodging.
"""
import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Union
from reimbursement.core.exceptions import ValidationFailure
from reimbursement.models.trip import TripRole
from reimbursement.schemas.report import PeriodReport, PeriodFilter, TripLine, MultiRoleInfo
from reimbursement.schemas.trip import TripRead, VehicleRead
from reimbursement.schemas.warning import EngineWarning, WarningKind
from reimbursement.services import calculator

logger = logging.getLogger(__name__)


def _trip_totals(trips: List[TripRead], vehicles: Dict[int, VehicleRead]) -> dict:
    """Km, toll and meal totals plus one line per trip."""
    totals = {
        "total_distance": Decimal(0),
        "total_reimbursement": Decimal(0),
        "total_toll_fees": Decimal(0),
        "total_meal_reimbursement": Decimal(0),
    }
    lines = []
    for trip in trips:
        vehicle = vehicles.get(trip.vehicle_id)
        distance = calculator.effective_distance(trip)
        km = calculator.km_reimbursement(trip, vehicle)
        toll = calculator.toll_contribution(trip)
        meal = calculator.meal_contribution(trip)
        
        totals["total_distance"] += distance
        totals["total_reimbursement"] += km
        totals["total_toll_fees"] += toll
        totals["total_meal_reimbursement"] += meal
        
        lines.append(TripLine(
            trip_id=trip.id,
            date=trip.date,
            trip_role=trip.trip_role,
            effective_distance=distance,
            rate_per_km=calculator.vehicle_rate(vehicle),
            km_reimbursement=km,
            toll_contribution=toll,
            meal_contribution=meal,
            total=km + toll + meal
        ))
    totals["lines"] = lines
    return totals


async def build_period_report(store, person_id: int, date_from: date, date_to: date) -> Optional[PeriodReport]:
    """
    Build the reimbursement report for a person over [date_from, date_to].
    
    Returns None when the person has no trips, expenses or stays in the
    window, so "no data" is never confused with a report summing to zero.
    Store failures propagate as ExternalFailure.
    """
    if date_from > date_to:
        raise ValidationFailure("date_from must not be after date_to")
    
    period = PeriodFilter(person_id=person_id, date_from=date_from, date_to=date_to)
    trips = await store.list_trips(period)
    expenses = await store.list_expenses(period)
    accommodations = await store.list_accommodations(period)
    
    if not trips and not expenses and not accommodations:
        return None
    
    vehicles: Dict[int, VehicleRead] = {}
    warnings: List[EngineWarning] = []
    for trip in trips:
        if trip.vehicle_id in vehicles:
            continue
        vehicle = await store.get_vehicle(trip.vehicle_id)
        if vehicle is not None:
            vehicles[trip.vehicle_id] = vehicle
    
    for trip in trips:
        if trip.vehicle_id not in vehicles:
            logger.warning(f"Trip {trip.id} references missing vehicle {trip.vehicle_id}")
            warnings.append(EngineWarning(
                kind=WarningKind.DATA_INTEGRITY,
                message=f"Vehicle {trip.vehicle_id} not found, km reimbursement set to 0",
                trip_id=trip.id
            ))
    
    totals = _trip_totals(trips, vehicles)
    
    return PeriodReport(
        person_id=person_id,
        date_from=date_from,
        date_to=date_to,
        trips=trips,
        expenses=expenses,
        accommodations=accommodations,
        vehicles=vehicles,
        total_expenses=sum((e.amount for e in expenses), Decimal(0)),
        total_accommodations=sum((a.amount for a in accommodations), Decimal(0)),
        warnings=warnings,
        **totals
    )


async def build_monthly_report(store, person_id: int, month: int, year: int) -> Optional[PeriodReport]:
    """Report over a calendar month (month is 1-12)."""
    if not 1 <= month <= 12:
        raise ValidationFailure(f"Invalid month: {month}")
    last_day = calendar.monthrange(year, month)[1]
    return await build_period_report(store, person_id, date(year, month, 1), date(year, month, last_day))


def filter_by_role(report: PeriodReport, role: Union[TripRole, str]) -> PeriodReport:
    """
    New report restricted to trips made in ``role``.
    
    Only km, toll and meal totals are recomputed. Expenses and
    accommodations have no role and pass through unchanged.
    """
    try:
        role = TripRole(role)
    except ValueError:
        raise ValidationFailure(f"Unknown trip role: {role}")
    
    trips = [trip for trip in report.trips if trip.trip_role == role]
    trip_ids = {trip.id for trip in trips}
    totals = _trip_totals(trips, report.vehicles)
    warnings = [
        w for w in report.warnings
        if w.trip_id is None or w.trip_id in trip_ids
    ]
    return report.model_copy(update={
        "trip_role": role,
        "trips": trips,
        "warnings": warnings,
        **totals
    })


def detect_multi_role(report: PeriodReport) -> MultiRoleInfo:
    """Count trips per role; trips without a role are not counted."""
    role_counts = {role: 0 for role in TripRole}
    for trip in report.trips:
        if trip.trip_role:
            role_counts[trip.trip_role] += 1
    roles_used = [role for role, count in role_counts.items() if count > 0]
    return MultiRoleInfo(role_counts=role_counts, has_multiple_roles=len(roles_used) > 1)
