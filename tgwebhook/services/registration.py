"""Telegram webhook registration.

Talks to the Bot API administrative methods (setWebhook and getWebhookInfo)
directly over httpx so the platform's acknowledgement,
including its description, reaches the caller verbatim.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from tgwebhook.config import WebhookOptions
from tgwebhook.errors import UpstreamError
from tgwebhook.services.credentials import check_key, resolve_credentials
from tgwebhook.services.endpoint import resolve_webhook_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookAck:
    ok: bool
    description: str
    result: Any = None


class RegistrationClient:
    def __init__(
        self,
        api_url: str = "https://api.telegram.org",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def register(self, token: str, url: str) -> WebhookAck:
        """Point the bot's webhook at ``url``. Safe to repeat."""
        ack = await self._call(token, "setWebhook", {"url": url}, "failed to set webhook")
        logger.info("Webhook set: %s", ack.description)
        return ack

    async def webhook_info(self, token: str) -> dict[str, Any]:
        ack = await self._call(token, "getWebhookInfo", None, "failed to get webhook info")
        return ack.result or {}

    async def _call(
        self,
        token: str,
        method: str,
        payload: dict[str, Any] | None,
        failure: str,
    ) -> WebhookAck:
        url = f"{self.api_url}/bot{token}/{method}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(url, json=payload or {})
        except httpx.HTTPError as exc:
            # request URL embeds the token
            logger.warning("%s call failed: %s", method, type(exc).__name__)
            raise UpstreamError(f"{failure}: {type(exc).__name__}") from exc

        # Telegram reports failures in the body, often with a 4xx status
        try:
            body = resp.json()
        except ValueError as exc:
            raise UpstreamError(f"{failure}: unexpected response (HTTP {resp.status_code})") from exc
        if not isinstance(body, dict):
            raise UpstreamError(f"{failure}: unexpected response (HTTP {resp.status_code})")

        ack = WebhookAck(
            ok=bool(body.get("ok")),
            description=str(body.get("description", "")),
            result=body.get("result"),
        )
        if not ack.ok:
            logger.warning("%s rejected by Telegram: %s", method, ack.description)
            raise UpstreamError(f"{failure}: {ack.description}")
        return ack


async def register_webhook(
    options: WebhookOptions,
    client: RegistrationClient,
    key: str | None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Run the registration handshake and return Telegram's description.

    Every credential is checked before the key comparison and before any
    network call.
    """
    creds = resolve_credentials(options, environ)
    check_key(creds.secret, key, options.key_env_name)
    url = resolve_webhook_url(creds.host, options.webhook_path)
    ack = await client.register(creds.token, url)
    return ack.description
