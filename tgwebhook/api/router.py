from fastapi import APIRouter

from tgwebhook.api.health import router as health_router
from tgwebhook.api.telegram_webhook import build_router as build_telegram_router
from tgwebhook.config import Settings


def build_api_router(settings: Settings) -> APIRouter:
    api_router = APIRouter()
    api_router.include_router(health_router)
    api_router.include_router(
        build_telegram_router(settings.setup_path, settings.webhook_path)
    )
    return api_router
