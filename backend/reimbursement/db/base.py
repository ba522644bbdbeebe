"""
Declarative base and common columns.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(Base):
    """Abstract model carrying the primary key and audit timestamps."""
    __abstract__ = True
    
    id = Column(Integer, primary_key=True, index=True)
    # Python-side defaults so values are available after flush without a refresh
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
