import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tgwebhook.api.responses import webhook_error_handler
from tgwebhook.api.router import build_api_router
from tgwebhook.config import Settings, configure_logging
from tgwebhook.errors import WebhookError
from tgwebhook.services.dispatcher import Dispatcher, EchoHandler, UpdateHandler
from tgwebhook.services.registration import RegistrationClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    configure_logging(settings)
    logger.info(
        "tgwebhook started (setup=%s, webhook=%s)",
        settings.setup_path,
        settings.webhook_path,
    )
    yield
    logger.info("tgwebhook shut down")


def create_app(
    settings: Settings | None = None,
    handler: UpdateHandler | None = None,
) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="tgwebhook", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.webhook_options = settings.webhook_options()
    app.state.registration_client = RegistrationClient(
        api_url=settings.telegram_api_url,
        timeout=settings.request_timeout,
    )
    app.state.dispatcher = Dispatcher(handler or EchoHandler())

    app.add_exception_handler(WebhookError, webhook_error_handler)
    app.include_router(build_api_router(settings))
    return app


app = create_app()
