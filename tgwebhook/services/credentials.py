import hmac
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from tgwebhook.config import WebhookOptions
from tgwebhook.errors import AuthorizationError, ConfigurationError


@dataclass(frozen=True)
class Credentials:
    secret: str = field(repr=False)
    token: str = field(repr=False)
    host: str


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "")
    if not value:
        raise ConfigurationError(f"{name} is not set")
    return value


def resolve_credentials(
    options: WebhookOptions,
    environ: Mapping[str, str] | None = None,
) -> Credentials:
    """Read the registration secret, bot token and public host.

    Looked up on every call, never cached.
    """
    env = os.environ if environ is None else environ
    secret = _require(env, options.key_env_name)
    token = _require(env, options.token_env_name)
    host = _require(env, options.host_env_name)
    return Credentials(secret=secret, token=token, host=host)


def is_authorized(secret: str | None, key: str | None) -> bool:
    if not secret or not key:
        return False
    return hmac.compare_digest(secret.encode(), key.encode())


def check_key(secret: str | None, key: str | None, secret_name: str) -> None:
    if not secret:
        raise ConfigurationError(f"{secret_name} is not set")
    if not is_authorized(secret, key):
        raise AuthorizationError("invalid key")
