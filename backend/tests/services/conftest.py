"""Service test fixtures - async DB + FastAPI test client + auth helpers.

Invariants:
    - get_db dependency overridden to use the per-test SQLite database
    - db_manager patched so the readiness probe sees the test engine
    - auth_headers() signs a real token through the production issuing path
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import get_settings
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.infrastructure.identity import issue_access_token
import app.infrastructure.database as db_module
from app.main import app


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
def auth_headers():
    def _headers(user) -> dict:
        result = issue_access_token(user.id, get_settings())
        assert result.ok
        return {"Authorization": f"Bearer {result.token}"}

    return _headers
