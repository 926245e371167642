"""HTTP client fixture: the real application, sharing the test's transactional session."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from raas.config import get_settings
from raas.database.session import get_async_session
from raas.main import create_app


@pytest.fixture
async def api_client(db_session: AsyncSession):
    """
    AsyncClient over ASGITransport with `get_async_session` overridden.

    Requests see the rows created by service fixtures in the same test, and
    everything is rolled back with the test transaction. The base URL already
    includes the API prefix, so tests use paths such as `/domain/1`.
    """
    app = create_app()

    async def _session_override():
        yield db_session

    app.dependency_overrides[get_async_session] = _session_override

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=f"http://test{get_settings().API_PREFIX}") as client:
        yield client

    app.dependency_overrides.clear()
