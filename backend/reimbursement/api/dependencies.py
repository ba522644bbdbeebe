"""
Shared route dependencies.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from reimbursement.db.session import get_db
from reimbursement.db.store import SqlAlchemyStore


async def get_store(db: AsyncSession = Depends(get_db)) -> SqlAlchemyStore:
    """Data store bound to the request's session."""
    return SqlAlchemyStore(db)
