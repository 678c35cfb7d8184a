# pokedex_http_api/telemetry.py
from __future__ import annotations

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from . import __version__
from .config import Settings
from .logging import get_logger

logger = get_logger(__name__)


def setup_telemetry(settings: Settings) -> bool:
    """
    Initializes the OpenTelemetry SDK with OTLP export.

    Tracing stays off unless OTEL_EXPORTER_OTLP_ENDPOINT is configured.
    Returns True when a tracer provider was installed.
    """
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("telemetry_disabled", reason="no OTEL_EXPORTER_OTLP_ENDPOINT")
        return False

    resource = Resource.create(
        attributes={
            "service.name": settings.OTEL_SERVICE_NAME,
            "deployment.environment": settings.APP_ENV.value,
            "service.version": __version__,
        }
    )

    provider = TracerProvider(resource=resource)
    endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT.rstrip("/")
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces"))
    )

    if settings.DEBUG:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    logger.info("telemetry_enabled", service=settings.OTEL_SERVICE_NAME, endpoint=endpoint)
    return True


def instrument_fastapi(app: FastAPI, settings: Settings) -> None:
    """
    Auto-instruments the FastAPI application to trace incoming HTTP requests.
    """
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        FastAPIInstrumentor.instrument_app(app)
