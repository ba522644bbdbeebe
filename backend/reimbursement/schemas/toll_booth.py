"""
Pydantic schemas for TollBooth entity.
"""
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class TollBoothRecord(BaseModel):
    """Toll booth as held in the registry cache and passed to the store.

    ``id`` is None for a pair the store has not seen yet.
    """
    id: Optional[int] = None
    entry_station: str
    exit_station: str
    amount: Decimal
    usage_count: int = 1
    last_used_at: datetime
    
    class Config:
        from_attributes = True


class TollStationSuggestions(BaseModel):
    """Schema for the autocomplete response."""
    query: str
    stations: List[str]
