"""Route test fixtures: FastAPI test client over the test database.

Invariants:
    - get_db overridden to use the test session factory
    - db_manager patched so readiness and /api/init reach the test engine
    - dependency_overrides cleared after every test

Design Decisions:
    - Service doubles are AsyncMock instances installed per test through
      app.dependency_overrides (see override_service)
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from pothole_api.infrastructure.database import get_db, DatabaseSessionManager
import pothole_api.infrastructure.database as db_module
from pothole_api.main import app


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
def override_service():
    """Install a double for a provider: override_service(get_x_service, mock=None) -> mock."""
    def _install(provider, mock=None):
        mock = mock if mock is not None else AsyncMock()
        app.dependency_overrides[provider] = lambda: mock
        return mock
    return _install
