from fastapi import Request

from tgwebhook.config import WebhookOptions
from tgwebhook.services.dispatcher import Dispatcher
from tgwebhook.services.registration import RegistrationClient


def get_webhook_options(request: Request) -> WebhookOptions:
    return request.app.state.webhook_options


def get_registration_client(request: Request) -> RegistrationClient:
    return request.app.state.registration_client


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher
