"""
LECTIO - Observability Package

Structured logging for the reader, plus access to the OpenTelemetry tracer
used around corpus loading and search.

Usage:
    from observability import setup_logging, get_logger, get_tracer

    setup_logging()
    logger = get_logger(__name__)
    tracer = get_tracer(__name__)
"""
from opentelemetry import trace

from observability.logging import (
    LogContext,
    LoggingConfig,
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
    shutdown_logging,
)


def get_tracer(name: str) -> trace.Tracer:
    """Tracer from the globally configured provider (a no-op until one is set)."""
    return trace.get_tracer(name)


__all__ = [
    "LogContext",
    "LoggingConfig",
    "bind_context",
    "clear_context",
    "get_logger",
    "get_tracer",
    "setup_logging",
    "shutdown_logging",
]
