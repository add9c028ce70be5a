import logging

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class WebhookOptions(BaseModel):
    """Names the webhook route and where credentials come from.

    Credentials themselves are not stored here: only the names of the
    environment variables that hold them, so rotating a secret takes
    effect on the next request.
    """

    webhook_path: str = Field("/api/tg/webhook", min_length=1)
    token_env_name: str = Field("TELEGRAM_TOKEN", min_length=1)
    host_env_name: str = Field("VERCEL_URL", min_length=1)
    key_env_name: str = Field("TGVERCEL_KEY", min_length=1)
    key_param_name: str = Field("key", min_length=1)

    model_config = {"frozen": True}


def _option_default(name: str) -> str:
    return WebhookOptions.model_fields[name].default


class Settings(BaseSettings):
    # Webhook
    webhook_path: str = _option_default("webhook_path")
    setup_path: str = "/api/tg/setup"

    # Environment variable names holding credentials
    token_env_name: str = _option_default("token_env_name")
    host_env_name: str = _option_default("host_env_name")
    key_env_name: str = _option_default("key_env_name")

    # Query parameter carrying the caller's registration key
    key_param_name: str = _option_default("key_param_name")

    # Telegram Bot API
    telegram_api_url: str = "https://api.telegram.org"
    request_timeout: float = 10.0

    # App
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def webhook_options(self) -> WebhookOptions:
        return WebhookOptions(
            webhook_path=self.webhook_path,
            token_env_name=self.token_env_name,
            host_env_name=self.host_env_name,
            key_env_name=self.key_env_name,
            key_param_name=self.key_param_name,
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
