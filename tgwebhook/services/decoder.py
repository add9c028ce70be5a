import json

from pydantic import ValidationError

from tgwebhook.errors import DecodeError
from tgwebhook.models.update import Update


def decode_update(body: bytes) -> Update:
    """Parse a raw request body into an Update.

    A payload without a message (callback query, edited message, ...) is
    valid and decodes with ``message`` set to None.
    """
    if not body or not body.strip():
        raise DecodeError("empty request body")

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise DecodeError("update must be a JSON object")

    try:
        return Update.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"malformed update: {exc.error_count()} invalid field(s)") from exc
