"""Async Engine & Session Factory — engine construction shared by the app, migrations and tests.

Invariants:
    - In-memory SQLite always uses StaticPool: every session sees the same database
    - Sessions never expire on commit (no lazy loads in async context)

Design Decisions:
    - Separate from infrastructure/database.py: usable without the FastAPI
      singleton (scripts, test fixtures)
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool


def make_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Create an async engine; pool kwargs are ignored for SQLite."""
    if database_url.startswith("sqlite"):
        kwargs = {}
        if ":memory:" in database_url:
            kwargs = {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
    return create_async_engine(database_url, echo=False, **kwargs)


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
