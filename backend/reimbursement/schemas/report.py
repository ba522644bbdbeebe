"""
Pydantic schemas for period reports.
"""
from pydantic import BaseModel, computed_field
from typing import List, Dict, Optional
from datetime import date
from decimal import Decimal
from reimbursement.models.trip import TripRole
from reimbursement.schemas.trip import TripRead, VehicleRead
from reimbursement.schemas.expense import TripExpenseRead, AccommodationRead
from reimbursement.schemas.warning import EngineWarning


class TripLine(BaseModel):
    """Amounts contributed by a single trip."""
    trip_id: int
    date: date
    trip_role: Optional[TripRole] = None
    effective_distance: Decimal
    rate_per_km: Optional[Decimal] = None  # None when the vehicle no longer exists
    km_reimbursement: Decimal
    toll_contribution: Decimal
    meal_contribution: Decimal
    total: Decimal


class PeriodReport(BaseModel):
    """
    Aggregated reimbursement for one person over a date window.
    
    Built on demand and never persisted. A role-filtered report is a new
    object; trip totals cover only its trips while expense and lodging
    totals are carried over unfiltered.
    """
    person_id: int
    date_from: date
    date_to: date
    trip_role: Optional[TripRole] = None  # Set on role-filtered reports
    
    trips: List[TripRead] = []
    lines: List[TripLine] = []
    expenses: List[TripExpenseRead] = []
    accommodations: List[AccommodationRead] = []
    vehicles: Dict[int, VehicleRead] = {}  # Snapshot of the vehicles referenced by trips
    
    total_distance: Decimal = Decimal("0")
    total_reimbursement: Decimal = Decimal("0")
    total_toll_fees: Decimal = Decimal("0")
    total_meal_reimbursement: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    total_accommodations: Decimal = Decimal("0")
    
    warnings: List[EngineWarning] = []
    
    @computed_field
    @property
    def grand_total(self) -> Decimal:
        """Everything the person is owed for the period."""
        return (
            self.total_reimbursement
            + self.total_toll_fees
            + self.total_meal_reimbursement
            + self.total_expenses
            + self.total_accommodations
        )


class MultiRoleInfo(BaseModel):
    """Trip counts per role across an unfiltered report."""
    role_counts: Dict[TripRole, int]
    has_multiple_roles: bool


class ReportResponse(BaseModel):
    """Schema for the report endpoint: the report plus role information."""
    report: PeriodReport
    multi_role: MultiRoleInfo


class PeriodFilter(BaseModel):
    """Selection passed to the data store: one person, inclusive date window."""
    person_id: int
    date_from: date
    date_to: date
