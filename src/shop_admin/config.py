"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str = "http://localhost:3001"
    token_store_path: Path = Path("~/.shop_admin/session.json")
    request_timeout_seconds: float = 10.0
    query_stale_seconds: float = 30.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def resolved_token_store_path(self) -> Path:
        """Return the token store path with the user directory expanded."""
        return self.token_store_path.expanduser()
