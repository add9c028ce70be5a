import json

import httpx
import pytest

from tgwebhook.config import WebhookOptions
from tgwebhook.errors import AuthorizationError, ConfigurationError, UpstreamError
from tgwebhook.services.registration import RegistrationClient, register_webhook

ENV = {"TELEGRAM_TOKEN": "T", "VERCEL_URL": "h.example.com", "TGVERCEL_KEY": "abc123"}


def _client(handler) -> RegistrationClient:
    return RegistrationClient(api_url="https://telegram.test/", transport=httpx.MockTransport(handler))


class FakeTelegram:
    """Records setWebhook calls and answers like the Bot API."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else {
            "ok": True, "result": True, "description": "Webhook was set",
        }
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, bytes):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)


@pytest.mark.asyncio
async def test_register_posts_set_webhook():
    telegram = FakeTelegram()
    ack = await _client(telegram).register("T", "https://h.example.com/webhook")

    assert ack.ok is True
    assert ack.description == "Webhook was set"
    request = telegram.requests[0]
    assert str(request.url) == "https://telegram.test/botT/setWebhook"
    assert json.loads(request.content) == {"url": "https://h.example.com/webhook"}


@pytest.mark.asyncio
async def test_register_twice_succeeds_twice():
    telegram = FakeTelegram(body={"ok": True, "result": True, "description": "Webhook is already set"})
    client = _client(telegram)
    first = await client.register("T", "https://h/webhook")
    second = await client.register("T", "https://h/webhook")
    assert first.ok and second.ok
    assert len(telegram.requests) == 2


@pytest.mark.asyncio
async def test_register_reports_platform_failure_on_http_200():
    telegram = FakeTelegram(body={"ok": False, "description": "Bad Request: bad webhook"})
    with pytest.raises(UpstreamError, match="failed to set webhook: Bad Request: bad webhook"):
        await _client(telegram).register("T", "https://h/webhook")


@pytest.mark.asyncio
async def test_register_reads_error_body_on_http_401():
    telegram = FakeTelegram(
        status_code=401, body={"ok": False, "error_code": 401, "description": "Unauthorized"}
    )
    with pytest.raises(UpstreamError, match="Unauthorized"):
        await _client(telegram).register("bad", "https://h/webhook")


@pytest.mark.asyncio
async def test_register_rejects_non_json_response():
    telegram = FakeTelegram(status_code=502, body=b"<html>Bad Gateway</html>")
    with pytest.raises(UpstreamError, match="HTTP 502"):
        await _client(telegram).register("T", "https://h/webhook")


@pytest.mark.asyncio
async def test_register_transport_error_hides_token():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as excinfo:
        await _client(refuse).register("secret-token", "https://h/webhook")
    assert "ConnectError" in excinfo.value.message
    assert "secret-token" not in excinfo.value.message


@pytest.mark.asyncio
async def test_webhook_info_returns_result():
    telegram = FakeTelegram(body={"ok": True, "result": {"url": "https://h/webhook", "pending_update_count": 0}})
    info = await _client(telegram).webhook_info("T")
    assert info["url"] == "https://h/webhook"
    assert str(telegram.requests[0].url).endswith("/botT/getWebhookInfo")


@pytest.mark.asyncio
async def test_register_webhook_pipeline():
    telegram = FakeTelegram()
    description = await register_webhook(
        WebhookOptions(webhook_path="/webhook"), _client(telegram), "abc123", ENV
    )
    assert description == "Webhook was set"
    assert json.loads(telegram.requests[0].content) == {"url": "https://h.example.com/webhook"}


@pytest.mark.asyncio
async def test_register_webhook_wrong_key_makes_no_call():
    telegram = FakeTelegram()
    with pytest.raises(AuthorizationError):
        await register_webhook(WebhookOptions(), _client(telegram), "wrong", ENV)
    assert telegram.requests == []


@pytest.mark.asyncio
async def test_register_webhook_missing_token_makes_no_call():
    telegram = FakeTelegram()
    env = {k: v for k, v in ENV.items() if k != "TELEGRAM_TOKEN"}
    with pytest.raises(ConfigurationError, match="TELEGRAM_TOKEN"):
        await register_webhook(WebhookOptions(), _client(telegram), "abc123", env)
    assert telegram.requests == []
