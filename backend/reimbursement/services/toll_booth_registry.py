"""
Self-learning registry of toll booth fares.

The cache of known booths is handed in by the caller; nothing here is
module-level state. Every saved trip teaches the registry the latest fare
for its station pair(s).
"""
import logging
from decimal import Decimal
from typing import List, Optional, Tuple
from reimbursement.core.config import settings
from reimbursement.core.exceptions import ValidationFailure, ExternalFailure
from reimbursement.db.base import utcnow
from reimbursement.schemas.toll_booth import TollBoothRecord
from reimbursement.schemas.warning import EngineWarning, WarningKind

logger = logging.getLogger(__name__)


def booth_key(entry_station: str, exit_station: str) -> Tuple[str, str]:
    """Identity of a station pair. Directional: (a, b) != (b, a)."""
    return (entry_station.lower(), exit_station.lower())


class TollBoothRegistry:
    """Case-insensitive store of (entry, exit) fares backed by a data store."""
    
    def __init__(self, store, booths: Optional[List[TollBoothRecord]] = None, strict: Optional[bool] = None):
        self.store = store
        self.booths = booths if booths is not None else []
        self.strict = settings.TOLL_STRICT_VALIDATION if strict is None else strict
    
    @classmethod
    async def load(cls, store, strict: Optional[bool] = None) -> "TollBoothRegistry":
        """Build a registry from every booth the store knows."""
        booths = await store.list_toll_booths()
        return cls(store, booths, strict=strict)
    
    def lookup(self, entry_station: str, exit_station: str) -> Optional[TollBoothRecord]:
        """Known booth for the pair, matched case-insensitively."""
        key = booth_key(entry_station, exit_station)
        for booth in self.booths:
            if booth_key(booth.entry_station, booth.exit_station) == key:
                return booth
        return None
    
    def check_usage(self, entry_station: Optional[str], exit_station: Optional[str], amount: Optional[Decimal]) -> bool:
        """True if the usage can be recorded. In strict mode invalid input raises instead."""
        valid = bool(
            entry_station and entry_station.strip()
            and exit_station and exit_station.strip()
            and amount is not None and amount > 0
        )
        if not valid and self.strict:
            raise ValidationFailure("Toll booth needs entry station, exit station and a positive amount")
        return valid

    async def record_usage(
        self,
        entry_station: Optional[str],
        exit_station: Optional[str],
        amount: Optional[Decimal]
    ) -> Optional[EngineWarning]:
        """
        Learn the fare for a station pair.
        
        Blank stations or a non-positive amount are ignored (or rejected with
        ValidationFailure in strict mode). An existing pair takes the new
        amount, one more use and a fresh timestamp; a new pair starts at one
        use. A store failure is returned as a warning, never raised: the trip
        save that triggered it stands.
        """
        if not self.check_usage(entry_station, exit_station, amount):
            logger.debug(f"Ignoring toll booth usage {entry_station!r} -> {exit_station!r} ({amount})")
            return None

        existing = self.lookup(entry_station, exit_station)
        if existing:
            record = existing.model_copy(update={
                "amount": Decimal(amount),
                "usage_count": existing.usage_count + 1,
                "last_used_at": utcnow()
            })
        else:
            record = TollBoothRecord(
                entry_station=entry_station,
                exit_station=exit_station,
                amount=Decimal(amount),
                usage_count=1,
                last_used_at=utcnow()
            )
        
        try:
            saved = await self.store.upsert_toll_booth(record)
        except ExternalFailure as e:
            logger.warning(f"Toll booth {entry_station} -> {exit_station} not saved: {e}")
            return EngineWarning(
                kind=WarningKind.TOLL_LEARNING,
                message=f"Toll fare {entry_station} -> {exit_station} could not be saved"
            )
        
        if existing:
            self.booths = [saved if b is existing else b for b in self.booths]
            logger.debug(f"Updated toll booth {saved.entry_station} -> {saved.exit_station}: {saved.amount} (used {saved.usage_count}x)")
        else:
            self.booths = [saved] + self.booths
            logger.debug(f"Created toll booth {saved.entry_station} -> {saved.exit_station}: {saved.amount}")
        return None
