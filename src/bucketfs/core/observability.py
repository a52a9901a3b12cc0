"""Structured logging and optional tracing for bucketfs.

Log events are JSON lines on stderr so that commands such as ``bucketfs cat``
can stream object content on stdout. Spans are only exported when
``BUCKETFS_OTEL_ENABLED`` is set; otherwise the tracer is a no-op.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from .config import settings


def setup_tracing() -> None:
    """Register a tracer provider exporting listing spans to the console."""
    if not settings.otel_enabled:
        return

    provider = TracerProvider(
        resource=Resource.create({"service.name": settings.otel_service_name})
    )
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)


def setup_logging() -> None:
    """Configure structlog to render bucket operations as JSON on stderr."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Module logger; pass context as keyword arguments (bucket=, key=)."""
    return structlog.get_logger(name)


def get_tracer(name: str) -> trace.Tracer:
    """Module tracer, no-op unless tracing is enabled."""
    return trace.get_tracer(name)


setup_logging()
setup_tracing()
