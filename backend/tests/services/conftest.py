"""Service test fixtures — async DB, seed data and FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - File database instead of :memory:, whose engine shares a single
      connection, so concurrent sessions would not contend like real clients
    - Seed fixtures commit through test_db; services get their own sessions
      from test_session_factory when a test needs isolation
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from condo.db.base import Base
from condo.infrastructure.database import get_db, DatabaseSessionManager
from condo.models.facility import Facility
from condo.models.invoice import Invoice
from condo.models.unit import Unit
import condo.infrastructure.database as db_module
from condo.main import app


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'condo.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def gym(test_db):
    """Facility with capacity 2."""
    facility = Facility(name="Gym", description="Level 3", capacity=2)
    test_db.add(facility)
    await test_db.commit()
    return facility


@pytest.fixture
async def bbq_pit(test_db):
    """Facility with capacity 1."""
    facility = Facility(name="BBQ Pit", capacity=1)
    test_db.add(facility)
    await test_db.commit()
    return facility


@pytest.fixture
async def unit(test_db):
    unit = Unit(unit_no="12-03")
    test_db.add(unit)
    await test_db.commit()
    return unit


@pytest.fixture
async def invoice(test_db, unit):
    """January invoice of unit 12-03, Unpaid."""
    invoice = Invoice(
        unit_id=unit.unit_id,
        period_start=date(2025, 1, 1),
        period_end=date(2025, 1, 31),
        total_amount=Decimal("150.00"),
        condo_fee=Decimal("120.00"),
        carpark_fee=Decimal("30.00"),
    )
    test_db.add(invoice)
    await test_db.commit()
    return invoice
