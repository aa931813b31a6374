"""Root conftest: shared test configuration and async database fixtures.

Invariants:
    - Every test that asks for a database gets a fresh in-memory SQLite schema
    - Environment defaults are set before any pothole_api module reads settings

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for repository
      and route tests (PostgreSQL-specific features not exercised here)
"""

import os

# Keep tests off the production database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from pothole_api.db.base import Base  # noqa: E402
from pothole_api.db.seed import seed_organizations  # noqa: E402
import pothole_api.models  # noqa: E402,F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
async def seeded_directory(test_session_factory):
    """Insert the default community organizations (ids 1-3)."""
    async with test_session_factory() as session:
        await seed_organizations(session)
