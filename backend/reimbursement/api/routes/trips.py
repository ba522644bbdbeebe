"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from reimbursement.api.dependencies import get_store
from reimbursement.core.exceptions import ValidationFailure, ExternalFailure
from reimbursement.db.store import SqlAlchemyStore
from reimbursement.schemas.trip import TripCreate
from reimbursement.services.trip_service import save_trip, update_trip, load_registry, TripSaveResult

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=TripSaveResult, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    store: SqlAlchemyStore = Depends(get_store)
):
    """Create a trip and learn its toll fares."""
    registry, warnings = await load_registry(store)
    try:
        result = await save_trip(store, registry, trip_data)
    except ValidationFailure as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )
    except ExternalFailure as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )
    result.warnings = warnings + result.warnings
    return result


@router.put("/{trip_id}", response_model=TripSaveResult)
async def edit_trip(
    trip_id: int,
    trip_data: TripCreate,
    store: SqlAlchemyStore = Depends(get_store)
):
    """Replace a trip and its meals, learning its toll fares again."""
    registry, warnings = await load_registry(store)
    try:
        result = await update_trip(store, registry, trip_id, trip_data)
    except ValidationFailure as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )
    except ExternalFailure as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )
    result.warnings = warnings + result.warnings
    return result
