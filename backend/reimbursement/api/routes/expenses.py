"""
Documented expense and accommodation routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from reimbursement.api.dependencies import get_store
from reimbursement.core.exceptions import ExternalFailure
from reimbursement.db.store import SqlAlchemyStore
from reimbursement.schemas.expense import (
    TripExpenseCreate, TripExpenseRead, AccommodationCreate, AccommodationRead
)

router = APIRouter(tags=["expenses"])


@router.post("/expenses", response_model=TripExpenseRead, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: TripExpenseCreate,
    store: SqlAlchemyStore = Depends(get_store)
):
    """Record a documented expense (train, flight, taxi, parking...)."""
    try:
        return await store.save_expense(expense_data)
    except ExternalFailure as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.post("/accommodations", response_model=AccommodationRead, status_code=status.HTTP_201_CREATED)
async def create_accommodation(
    accommodation_data: AccommodationCreate,
    store: SqlAlchemyStore = Depends(get_store)
):
    """Record a lodging stay."""
    try:
        return await store.save_accommodation(accommodation_data)
    except ExternalFailure as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
