"""Telegram webhook endpoints.

The setup route registers this deployment's webhook URL with Telegram,
guarded by a shared key passed as a query parameter. The webhook route
receives updates pushed by Telegram and hands them to the dispatcher.
"""

import logging
import os

from fastapi import APIRouter, Depends, Request
from telegram import Bot
from telegram.error import TelegramError

from tgwebhook.api.responses import ok_response
from tgwebhook.config import WebhookOptions
from tgwebhook.dependencies import get_dispatcher, get_registration_client, get_webhook_options
from tgwebhook.errors import ConfigurationError
from tgwebhook.services.decoder import decode_update
from tgwebhook.services.dispatcher import Dispatcher
from tgwebhook.services.registration import RegistrationClient, register_webhook

logger = logging.getLogger(__name__)


async def setup_webhook(
    request: Request,
    options: WebhookOptions = Depends(get_webhook_options),
    client: RegistrationClient = Depends(get_registration_client),
):
    """Register the webhook URL with Telegram."""
    key = request.query_params.get(options.key_param_name)
    description = await register_webhook(options, client, key)
    return ok_response(description)


async def telegram_webhook(
    request: Request,
    options: WebhookOptions = Depends(get_webhook_options),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Process an incoming Telegram update.

    Always 200 once the body decodes, except for a message update arriving
    with no bot token configured, which is a deployment error (500).
    """
    update = decode_update(await request.body())
    if update.message is None:
        return ok_response({"ok": True})

    token = os.environ.get(options.token_env_name, "")
    if not token:
        raise ConfigurationError(f"{options.token_env_name} is not set")

    bot = Bot(token=token)
    try:
        async with bot:
            await dispatcher.dispatch(bot, update)
    except TelegramError:
        logger.exception("Bot session failed for update %s", update.update_id)
    return ok_response({"ok": True})


def build_router(setup_path: str, webhook_path: str) -> APIRouter:
    router = APIRouter(tags=["telegram"])
    router.add_api_route(setup_path, setup_webhook, methods=["GET", "POST"])
    router.add_api_route(webhook_path, telegram_webhook, methods=["POST"])
    return router
