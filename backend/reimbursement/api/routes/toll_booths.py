"""
Toll booth lookup and station autocomplete routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from reimbursement.api.dependencies import get_store
from reimbursement.core.exceptions import ExternalFailure
from reimbursement.db.store import SqlAlchemyStore
from reimbursement.schemas.toll_booth import TollBoothRecord, TollStationSuggestions
from reimbursement.services.toll_booth_registry import TollBoothRegistry
from reimbursement.services.toll_station_index import suggest

router = APIRouter(prefix="/toll-booths", tags=["toll-booths"])


async def _load_registry(store: SqlAlchemyStore) -> TollBoothRegistry:
    try:
        return await TollBoothRegistry.load(store)
    except ExternalFailure as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/lookup", response_model=TollBoothRecord)
async def lookup_toll_booth(
    entry_station: str = Query(..., alias="entry"),
    exit_station: str = Query(..., alias="exit"),
    store: SqlAlchemyStore = Depends(get_store)
):
    """Get the last known fare for an entry/exit pair."""
    registry = await _load_registry(store)
    booth = registry.lookup(entry_station, exit_station)
    if not booth:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Toll booth not found"
        )
    return booth


@router.get("/suggest", response_model=TollStationSuggestions)
async def suggest_stations(
    q: str = "",
    store: SqlAlchemyStore = Depends(get_store)
):
    """Autocomplete station names, most used first."""
    registry = await _load_registry(store)
    return TollStationSuggestions(query=q, stations=suggest(q, registry.booths))
