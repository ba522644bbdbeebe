"""
Toll booth model: learned fares for directional station pairs.
"""
from sqlalchemy import Column, String, Numeric, DateTime, Integer, UniqueConstraint
from reimbursement.db.base import BaseModel


class TollBooth(BaseModel):
    """Fare for an (entry, exit) highway station pair. Matching is case-insensitive."""
    __tablename__ = "toll_booths"
    __table_args__ = (
        UniqueConstraint("entry_station", "exit_station", name="uq_toll_booths_pair"),
    )
    
    entry_station = Column(String(100), nullable=False, index=True)
    exit_station = Column(String(100), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    usage_count = Column(Integer, default=1, nullable=False)
    last_used_at = Column(DateTime, nullable=False)
