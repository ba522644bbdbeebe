"""
Advisory warnings attached to engine results.
"""
from pydantic import BaseModel
from typing import Optional
import enum


class WarningKind(str, enum.Enum):
    """Warning kind enumeration."""
    DATA_INTEGRITY = "data_integrity"  # e.g. trip references a deleted vehicle
    TOLL_LEARNING = "toll_learning"  # toll booth registry write failed


class EngineWarning(BaseModel):
    """A non-fatal problem; the computation went ahead with a degraded value."""
    kind: WarningKind
    message: str
    trip_id: Optional[int] = None
