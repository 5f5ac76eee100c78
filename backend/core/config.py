"""core/config.py — Application configuration via Pydantic BaseSettings.

Loads environment variables from .env (and the OS environment).
Import `settings` from this module wherever configuration is needed.

Usage:
    from core.config import settings

    host = settings.db_host
    if settings.is_production:
        ...
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env lives in the project root (one level above backend/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database (DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_DATABASE)
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = ""
    db_password: str = ""
    db_database: str = ""
    # CA bundle for the server certificate; the system trust store is used when unset.
    # Certificate verification itself cannot be turned off.
    db_ssl_ca: Optional[str] = None
    db_connect_timeout: int = 10

    # HTTP
    port: int = 3000

    # Application
    environment: str = "development"
    log_level: str = "DEBUG"

    # CORS — any origin may call the API
    allowed_origins: list[str] = ["*"]

    @field_validator("db_ssl_ca")
    @classmethod
    def _resolve_ca_path(cls, v: Optional[str]) -> Optional[str]:
        # relative paths are taken from the project root, not the working directory
        if v and not Path(v).is_absolute():
            return str(_PROJECT_ROOT / v)
        return v or None

    @field_validator("log_level", mode="before")
    @classmethod
    def _uppercase_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Singleton — import this everywhere
settings = Settings()
