# pokedex_http_api/dependencies.py
from __future__ import annotations

import re
import secrets
from typing import List, Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

from .config import AppEnv, Settings
from .container import Container
from .logging import get_logger
from .services.pokemon_service import PokemonDataService

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Container access
# -----------------------------------------------------------------------------


def get_container(request: Request) -> Container:
    """
    The container created by ``create_app`` for this application.

    Tests can swap providers on it (``container.pokemon_service.override``)
    or override this dependency entirely.
    """
    return request.app.state.container


def get_settings_dep(container: Container = Depends(get_container)) -> Settings:
    return container.settings()


def get_pokemon_service(
    container: Container = Depends(get_container),
) -> PokemonDataService:
    return container.pokemon_service()


# -----------------------------------------------------------------------------
# Security: Admin API key
# -----------------------------------------------------------------------------
api_key_scheme = APIKeyHeader(name="X-API-Key", auto_error=False)


def _normalize_presented_key(x_api_key: Optional[str]) -> Optional[str]:
    if not x_api_key:
        return None
    key = x_api_key.strip()
    if key.lower().startswith("bearer "):
        key = key[7:].strip()
    return key or None


def _split_secrets(configured: str) -> List[str]:
    # Comma or whitespace separated, so keys can be rotated.
    parts = re.split(r"[,\s]+", configured.strip())
    return [p for p in parts if p]


def _is_valid_key(presented: str, configured: str) -> bool:
    for candidate in _split_secrets(configured):
        if secrets.compare_digest(presented, candidate):
            return True
    return False


async def verify_api_key(
    x_api_key: Optional[str] = Security(api_key_scheme),
    settings: Settings = Depends(get_settings_dep),
) -> str:
    """
    Validates the admin API key used by mutating endpoints (POST /reload).

    - In PRODUCTION: fails closed if API_SECRET is missing.
    - In DEVELOPMENT/TESTING: if API_SECRET is missing, auth is bypassed
      (returns "dev-bypass") for local workflows.
    """
    configured = (settings.API_SECRET or "").strip()
    presented = _normalize_presented_key(x_api_key)

    if not configured:
        if settings.APP_ENV == AppEnv.PRODUCTION:
            logger.error("api_secret_missing")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server misconfiguration: API_SECRET is not set",
            )
        return "dev-bypass"

    if not presented:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-API-Key header",
        )

    if not _is_valid_key(presented, configured):
        logger.warning("api_key_rejected")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid X-API-Key credentials",
        )

    return presented


__all__ = [
    "get_container",
    "get_settings_dep",
    "get_pokemon_service",
    "verify_api_key",
]
