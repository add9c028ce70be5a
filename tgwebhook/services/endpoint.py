from tgwebhook.errors import ConfigurationError


def resolve_webhook_url(host: str, path: str) -> str:
    # host is deployment configuration, not user input
    if not host:
        raise ConfigurationError("public host is not set")
    return f"https://{host}{path}"
