"""Service test fixtures — async DB, seeded employees, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so readiness probes hit the test engine
    - The clock is pinned: promotions without a date land on TODAY

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (SELECT ... FOR UPDATE is a no-op there; the in-process lock still applies)
    - Seed rows come from tests/services/seed_data.py, not the store under test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from tenure.api.routes.employees import get_clock
from tenure.db.base import Base
from tenure.db.session import create_session_factory, make_engine
from tenure.infrastructure.database import get_db, DatabaseSessionManager
import tenure.infrastructure.database as db_module
from tenure.main import app

from tests.services.seed_data import TODAY, add_departments, add_employee


@pytest.fixture
async def test_engine():
    engine = make_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency and clock overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: TODAY)

    # Patch db_manager for the readiness probe
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
async def seed_employee(test_session_factory):
    """Employee 10001: Engineer in d001 at 60000 since 2020-01-01."""
    await add_departments(test_session_factory)
    await add_employee(test_session_factory)
    return 10001
