"""SDK configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("DVIDS_ENVIRONMENT", "local")

DEFAULT_BASE_URL = "https://submitapi.dvidshub.net"
DEFAULT_AUTH_BASE_URL = "https://api.dvidshub.net"


class Settings(BaseSettings):
    """Client settings loaded from `DVIDS_*` environment variables."""

    base_url: str = DEFAULT_BASE_URL
    auth_base_url: str = DEFAULT_AUTH_BASE_URL
    access_token: str | None = None
    timeout: float = 30.0
    verify_ssl: bool = True
    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    scopes: str = "basic,email,upload"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="DVIDS_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_scopes(raw: str | None) -> tuple[str, ...]:
    """Parse a comma or space separated OAuth2 scope list."""
    if raw is None:
        return ()
    scopes: list[str] = []
    for chunk in raw.replace(",", " ").split():
        value = chunk.strip()
        if value and value not in scopes:
            scopes.append(value)
    return tuple(scopes)
