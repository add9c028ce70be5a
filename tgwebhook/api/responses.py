import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from tgwebhook.errors import AuthorizationError, ConfigurationError, WebhookError

logger = logging.getLogger(__name__)

_FALLBACK_BODY = b'{"error":"internal error"}'


def _json(content: Any, status_code: int) -> Response:
    try:
        return JSONResponse(content=content, status_code=status_code)
    except (TypeError, ValueError):
        logger.exception("Could not serialize response body")
        return Response(content=_FALLBACK_BODY, status_code=500, media_type="application/json")


def ok_response(payload: Any) -> Response:
    return _json(payload, 200)


def error_response(exc: WebhookError) -> Response:
    if isinstance(exc, AuthorizationError):
        logger.info("Rejected request: %s", exc.message)
    elif isinstance(exc, ConfigurationError):
        logger.error("Configuration error: %s", exc.message)
    return _json({"error": exc.message}, exc.status_code)


async def webhook_error_handler(request: Request, exc: WebhookError) -> Response:
    return error_response(exc)
