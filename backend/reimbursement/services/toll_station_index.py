"""
Toll station autocomplete ranked by historical usage.
"""
from typing import Dict, List, Optional
from reimbursement.core.config import settings
from reimbursement.schemas.toll_booth import TollBoothRecord


def station_usage(booths: List[TollBoothRecord]) -> Dict[str, int]:
    """
    Combined usage per station, entry and exit roles summed.
    
    Keys are lower-cased; insertion order follows first appearance in
    ``booths`` (entry before exit within a record).
    """
    usage: Dict[str, int] = {}
    for booth in booths:
        for station in (booth.entry_station, booth.exit_station):
            key = station.lower()
            usage[key] = usage.get(key, 0) + booth.usage_count
    return usage


def suggest(query: str, booths: List[TollBoothRecord], limit: Optional[int] = None) -> List[str]:
    """
    Stations whose name contains ``query`` (case-insensitive), most used first.
    
    Each station appears once, spelled as it was first seen. Ties keep
    first-appearance order.
    """
    if limit is None:
        limit = settings.TOLL_SUGGESTION_LIMIT
    needle = (query or "").lower()
    usage = station_usage(booths)
    
    names: Dict[str, str] = {}
    for booth in booths:
        for station in (booth.entry_station, booth.exit_station):
            key = station.lower()
            if needle in key and key not in names:
                names[key] = station
    
    # sorted() is stable, so equal usage keeps first-appearance order
    ranked = sorted(names, key=lambda key: usage[key], reverse=True)
    stations = [names[key] for key in ranked]
    if limit:
        stations = stations[:limit]
    return stations
