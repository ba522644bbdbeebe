"""
Period report routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
from datetime import date
from reimbursement.api.dependencies import get_store
from reimbursement.core.exceptions import ValidationFailure, ExternalFailure
from reimbursement.db.store import SqlAlchemyStore
from reimbursement.models.trip import TripRole
from reimbursement.schemas.report import ReportResponse
from reimbursement.services.report_service import (
    build_period_report, build_monthly_report, filter_by_role, detect_multi_role
)

router = APIRouter(prefix="/reports", tags=["reports"])


def _respond(report, trip_role: Optional[TripRole]) -> ReportResponse:
    """Attach role info (always from the unfiltered report), then filter."""
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No data for this period"
        )
    multi_role = detect_multi_role(report)
    if trip_role is not None:
        report = filter_by_role(report, trip_role)
    return ReportResponse(report=report, multi_role=multi_role)


@router.get("/{person_id}/monthly", response_model=ReportResponse)
async def get_monthly_report(
    person_id: int,
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900),
    trip_role: Optional[TripRole] = None,
    store: SqlAlchemyStore = Depends(get_store)
):
    """Get the report for a calendar month."""
    try:
        report = await build_monthly_report(store, person_id, month, year)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ExternalFailure as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return _respond(report, trip_role)


@router.get("/{person_id}", response_model=ReportResponse)
async def get_period_report(
    person_id: int,
    date_from: date,
    date_to: date,
    trip_role: Optional[TripRole] = None,
    store: SqlAlchemyStore = Depends(get_store)
):
    """Get the report for an arbitrary date window, optionally for one role."""
    try:
        report = await build_period_report(store, person_id, date_from, date_to)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ExternalFailure as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return _respond(report, trip_role)
