"""Shared pytest fixtures for Rubber Duck tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from rubberduck.config import Settings
from rubberduck.context.router import get_settings
from rubberduck.main import app


@pytest.fixture
def settings() -> Settings:
    """Settings with adaptive context off, so the defaults apply unless asked."""
    return Settings(_env_file=None, adaptive_context=False)


@pytest.fixture
async def client(settings):
    """Async test client with test settings wired into the app."""
    app.dependency_overrides[get_settings] = lambda: settings
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
