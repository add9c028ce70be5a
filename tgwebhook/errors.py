"""Error taxonomy for the registration and delivery paths.

Each error carries the HTTP status it is rendered with, so routes only
raise and the response writer decides the wire shape.
"""


class WebhookError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(WebhookError):
    """A required setting (usually an environment variable) is missing."""

    status_code = 500


class AuthorizationError(WebhookError):
    status_code = 401


class UpstreamError(WebhookError):
    """Telegram was unreachable or reported a failure."""

    status_code = 500


class DecodeError(WebhookError):
    status_code = 400
