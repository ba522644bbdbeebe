"""
Run migration to move legacy trip meals into the trip_meals table.
"""
import asyncio
import sys
import os

# Add the backend directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from reimbursement.db.session import SessionLocal
from reimbursement.db.migrations.migrate_legacy_meals import migrate


async def main():
    async with SessionLocal() as db:
        await migrate(db)
    print("Migration completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
