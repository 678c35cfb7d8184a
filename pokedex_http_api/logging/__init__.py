# pokedex_http_api/logging/__init__.py

"""
Logging helpers for the Pokedex HTTP API.

API code simply does:

    from pokedex_http_api.logging import get_logger

    logger = get_logger(__name__)
    logger.info("data_loaded", pokemon=151)

and stays decoupled from how structlog is configured (see
``pokedex_http_api.logging.config``).
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

DEFAULT_LOGGER_NAME = "pokedex_http_api"


def get_logger(name: Optional[str] = None, **initial_values: Any) -> Any:
    """
    Return a structlog logger bound to ``name`` (or the service default).
    """
    return structlog.get_logger(name or DEFAULT_LOGGER_NAME, **initial_values)


__all__ = ["get_logger", "DEFAULT_LOGGER_NAME"]
