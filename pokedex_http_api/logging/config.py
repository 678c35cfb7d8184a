# pokedex_http_api/logging/config.py

"""
structlog configuration for the Pokedex HTTP API.

Called once at application startup from ``pokedex_http_api.main``::

    from pokedex_http_api.logging.config import configure_logging

    configure_logging(settings)

Output is machine-readable JSON when ``LOG_FORMAT=json`` (production) and a
colored console rendering otherwise.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping

import structlog
from opentelemetry import trace

from ..config import Settings


def add_open_telemetry_spans(
    _: Any, __: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """
    Processor to inject the current TraceID and SpanID into the log entry.
    """
    span = trace.get_current_span()
    if not span.is_recording():
        event_dict["trace_id"] = None
        event_dict["span_id"] = None
        return event_dict

    ctx = span.get_span_context()
    event_dict["trace_id"] = format(ctx.trace_id, "032x")
    event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def _parse_level(value: str) -> int:
    """Map 'debug' / 'INFO' / ... to a logging constant, defaulting to INFO."""
    level = getattr(logging, (value or "").strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Settings) -> None:
    """
    Configure structlog and the standard library logging used by uvicorn.
    """
    level = _parse_level(settings.LOG_LEVEL)

    processors = [
        structlog.contextvars.merge_contextvars,
        add_open_telemetry_spans,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Third-party libraries (uvicorn, fastapi) log through the stdlib.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )


__all__ = ["configure_logging", "add_open_telemetry_spans"]
