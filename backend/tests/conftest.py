from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from offboarding.core.dependencies import get_store_handle
from offboarding.main import app

VALID_SUBMISSION: dict = {
    "empName": "Jane Doe",
    "position": "Engineer",
    "department": "Engineering",
    "empId": "ATS0123",
    "feedback": "Great team, sad to leave.",
    "finalSalary": 75000,
    "bonus": 5000,
    "acknowledgment": "I acknowledge receipt of my final pay.",
}


def make_submission(**overrides) -> dict:
    data = dict(VALID_SUBMISSION)
    data.update(overrides)
    return data


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _store_settings(tmp_path):
    from offboarding.core.config import settings

    original_url = settings.DATABASE_URL
    original_attempts = settings.DB_CONNECT_ATTEMPTS
    original_delay = settings.DB_CONNECT_RETRY_DELAY
    settings.DATABASE_URL = f"sqlite+aiosqlite:///{tmp_path / 'offboarding.db'}"
    settings.DB_CONNECT_ATTEMPTS = 2
    settings.DB_CONNECT_RETRY_DELAY = 0.0
    yield
    settings.DATABASE_URL = original_url
    settings.DB_CONNECT_ATTEMPTS = original_attempts
    settings.DB_CONNECT_RETRY_DELAY = original_delay


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def fake_store():
    store = MagicMock()
    store.insert = AsyncMock(return_value=1)
    store.list_all = AsyncMock(return_value=[])
    store.health_check = AsyncMock(return_value=True)
    return store


@pytest.fixture
def fake_store_client(fake_store):
    app.dependency_overrides[get_store_handle] = lambda: fake_store
    yield TestClient(app)
    app.dependency_overrides.clear()
