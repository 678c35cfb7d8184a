# pokedex_http_api/config.py
from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic; every field can be set from
    the environment or a `.env` file.
    """

    # --- Application Meta ---
    APP_NAME: str = "pokedex-api-service"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- HTTP ---
    HOST: str = "0.0.0.0"
    PORT: int = 20275
    API_PREFIX: str = "/api/v2"
    # Comma-separated; "*" allows every origin, empty allows none.
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Public origin used when rendering resource and image URLs.
    # Empty string yields root-relative URLs.
    BASE_URL: str = ""

    # --- Security ---
    # Admin key(s) for POST /reload. Unset means "bypass" outside production.
    API_SECRET: Optional[str] = None

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "pokedex-api"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- Persistence ---
    # Directory holding pokemon.json, species.json, evolution-chains.json,
    # types.json and suggestions.json.
    DATA_DIR: str = "data"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def data_path(self) -> Path:
        return Path(self.DATA_DIR).expanduser()

    @property
    def api_root(self) -> str:
        """Normalized prefix: leading slash, no trailing slash, "" for root."""
        prefix = self.API_PREFIX.strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = "/" + prefix
        return prefix

    @property
    def public_base_url(self) -> str:
        return self.BASE_URL.strip().rstrip("/")

    @property
    def cors_origins(self) -> List[str]:
        raw = (self.CORS_ORIGINS or "").strip()
        if raw == "*":
            return ["*"]
        # Empty means no cross-origin access at all.
        return [p.strip() for p in raw.split(",") if p.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the process-wide Settings instance, created from the environment
    on first use.
    """
    return Settings()


__all__ = ["AppEnv", "Settings", "get_settings"]
