from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tgwebhook.config import Settings
from tgwebhook.main import create_app
from tgwebhook.services.registration import WebhookAck


@pytest.fixture
def settings():
    """Test settings with the default route and env var names."""
    return Settings(
        webhook_path="/webhook",
        setup_path="/setup",
        token_env_name="TELEGRAM_TOKEN",
        host_env_name="VERCEL_URL",
        key_env_name="TGVERCEL_KEY",
        key_param_name="key",
        telegram_api_url="https://telegram.test",
        log_level="DEBUG",
    )


@pytest.fixture
def telegram_env(monkeypatch):
    monkeypatch.setenv("TELEGRAM_TOKEN", "T")
    monkeypatch.setenv("VERCEL_URL", "h.example.com")
    monkeypatch.setenv("TGVERCEL_KEY", "abc123")


@pytest.fixture
def mock_registration_client():
    client = AsyncMock()
    client.register.return_value = WebhookAck(ok=True, description="Webhook was set", result=True)
    return client


@pytest.fixture
def mock_handler():
    return AsyncMock()


@pytest_asyncio.fixture
async def test_app(settings, mock_registration_client):
    """FastAPI app with the outbound registration call mocked."""
    app = create_app(settings)
    app.state.registration_client = mock_registration_client
    yield app


@pytest_asyncio.fixture
async def client(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
