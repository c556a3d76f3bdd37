import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")


@pytest.fixture
def missing_key_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")


async def _app_client():
    from bizsearch.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c


@pytest.fixture
async def client(mock_env):
    async for c in _app_client():
        yield c


@pytest.fixture
async def unconfigured_client(missing_key_env):
    async for c in _app_client():
        yield c
