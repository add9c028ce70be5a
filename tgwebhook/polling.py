"""Run the bot locally by long polling instead of receiving webhooks.

Uses python-telegram-bot's Application to fetch updates and feeds them to
the same Dispatcher the webhook route uses. Telegram refuses getUpdates
while a webhook is registered, so the Updater deletes it on start.

    python -m tgwebhook.polling
"""

from __future__ import annotations

import logging
import os

import telegram
from dotenv import load_dotenv
from telegram.ext import Application, ContextTypes, TypeHandler

from tgwebhook.config import Settings, configure_logging
from tgwebhook.errors import UpstreamError
from tgwebhook.models.update import Update
from tgwebhook.services.dispatcher import Dispatcher, EchoHandler
from tgwebhook.services.registration import RegistrationClient

logger = logging.getLogger(__name__)


class PollingBridge:
    """Adapts python-telegram-bot updates to the Dispatcher contract."""

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher

    async def on_update(self, update: telegram.Update, context: ContextTypes.DEFAULT_TYPE):
        decoded = Update.model_validate(update.to_dict())
        await self.dispatcher.dispatch(context.bot, decoded)


def build_application(token: str, dispatcher: Dispatcher, settings: Settings) -> Application:
    registration = RegistrationClient(
        api_url=settings.telegram_api_url,
        timeout=settings.request_timeout,
    )

    async def report_webhook(application: Application) -> None:
        try:
            info = await registration.webhook_info(token)
        except UpstreamError as exc:
            logger.warning("Could not read webhook info: %s", exc.message)
            return
        if info.get("url"):
            logger.info("Webhook %s will be removed for polling", info["url"])

    application = Application.builder().token(token).post_init(report_webhook).build()
    bridge = PollingBridge(dispatcher)
    application.add_handler(TypeHandler(telegram.Update, bridge.on_update))
    return application


def main() -> None:
    load_dotenv()
    settings = Settings()
    configure_logging(settings)

    token = os.environ.get(settings.token_env_name, "")
    if not token:
        raise SystemExit(f"{settings.token_env_name} is not set")

    application = build_application(token, Dispatcher(EchoHandler()), settings)
    logger.info("Polling for updates")
    application.run_polling(allowed_updates=telegram.Update.ALL_TYPES)


if __name__ == "__main__":
    main()
