"""Database Session Manager: async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - initialize_schema() only creates missing tables and seeds an empty directory;
      repeat calls are no-ops

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing skipped for SQLite URLs: aiosqlite engines reject QueuePool arguments
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from pothole_api.core.errors import DatabaseError
from pothole_api.db.base import Base
from pothole_api.db.seed import seed_organizations
import pothole_api.models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIError subclasses
_SQLALCHEMY_ERRORS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
)


def _classify(exc: SQLAlchemyError) -> tuple[str, str]:
    for exc_type, message, operation in _SQLALCHEMY_ERRORS:
        if isinstance(exc, exc_type):
            return message, operation
    return "Database operation failed", "unknown"


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            message, operation = _classify(e)
            logger.error(f"{message}: {e}", extra={"error_code": "DATABASE_ERROR"})
            raise DatabaseError(message, operation) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def initialize_schema(self) -> bool:
        """Create missing tables and seed an empty directory. Returns True when tables exist afterwards."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(f"Schema initialization failed: {e}", exc_info=True)
            raise DatabaseError("Schema creation failed", "create_all")
        async with self.session() as db:
            await seed_organizations(db)
        logger.info("Database schema initialized")
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the session manager itself."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
