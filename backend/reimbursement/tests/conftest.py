"""
Shared fixtures: an in-memory SQLite database per test.
"""
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from reimbursement.db.base import Base
from reimbursement.db.store import SqlAlchemyStore
from reimbursement.models import Person, Vehicle, TripExpense, Accommodation, ExpenseType


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(session):
    return SqlAlchemyStore(session)


@pytest_asyncio.fixture
async def person(session):
    """Person P with a 0.40 EUR/km car."""
    person = Person(name="Mario", surname="Rossi", is_docente=True, is_dipendente=True)
    person.vehicles.append(Vehicle(make="Fiat", model="Panda", plate="AB123CD",
                                   reimbursement_rate_per_km=Decimal("0.40")))
    session.add(person)
    await session.commit()
    return person


@pytest.fixture
def vehicle(person):
    return person.vehicles[0]


@pytest_asyncio.fixture
async def add_expense(session):
    async def _add(person_id, day, amount, expense_type=ExpenseType.TRENO):
        expense = TripExpense(person_id=person_id, date=day, amount=Decimal(amount),
                              expense_type=expense_type)
        session.add(expense)
        await session.commit()
        return expense
    return _add


@pytest_asyncio.fixture
async def add_accommodation(session):
    async def _add(person_id, date_from, date_to, amount):
        stay = Accommodation(person_id=person_id, date_from=date_from, date_to=date_to,
                             amount=Decimal(amount), location="Padova")
        session.add(stay)
        await session.commit()
        return stay
    return _add
