"""Routes decoded updates to a pluggable handler.

The same Dispatcher serves webhook deliveries and the local polling
command; only the source of Update values differs.
"""

from __future__ import annotations

import logging
from typing import Protocol

from telegram import Bot

from tgwebhook.models.update import Update

logger = logging.getLogger(__name__)


class UpdateHandler(Protocol):
    async def handle(self, bot: Bot, update: Update) -> None: ...


class Dispatcher:
    def __init__(self, handler: UpdateHandler):
        self.handler = handler

    async def dispatch(self, bot: Bot, update: Update) -> bool:
        """Run the handler once for a message update.

        Returns False when the update carries no message. Handler failures
        are logged and swallowed so the delivery is still acknowledged.
        """
        if update.message is None:
            logger.debug("Update %s has no message, skipping", update.update_id)
            return False

        try:
            await self.handler.handle(bot, update)
        except Exception:
            logger.exception(
                "Handler %s failed for update %s (chat %s)",
                type(self.handler).__name__,
                update.update_id,
                update.chat_id,
            )
        return True


class EchoHandler:
    """Replies to every text message with ``echo: <text>``."""

    async def handle(self, bot: Bot, update: Update) -> None:
        if update.text is None:
            return
        logger.info("[%s] %s", update.username, update.text)
        await bot.send_message(chat_id=update.chat_id, text=f"echo: {update.text}")
