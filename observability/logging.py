"""
LECTIO - Structured Logging

structlog on top of the standard library logging module. Every module asks
for a logger with get_logger(__name__) and emits key/value events:

    logger = get_logger(__name__)
    logger.debug("Location committed", key="42-2-15")

Events carry the service name, the environment, a UTC timestamp and, when a
span is active, its trace and span ids. Output goes to stderr as colored
console lines or JSON (LOG_FORMAT=json), optionally mirrored to a rotating
file (LOG_TO_FILE=true).
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
from opentelemetry import trace
from structlog.types import EventDict, Processor, WrappedLogger

_configured = False


@dataclass
class LoggingConfig:
    """Logging settings, read from the environment by default."""

    service_name: str = "lectio"
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())
    json_format: bool = field(default_factory=lambda: os.getenv("LOG_FORMAT", "console").lower() == "json")
    enable_trace_context: bool = True
    log_to_file: bool = field(default_factory=lambda: os.getenv("LOG_TO_FILE", "false").lower() == "true")
    log_file_path: Path = field(default_factory=lambda: Path(os.getenv("LOG_FILE", "./logs/lectio.log")))
    max_file_size: int = 5 * 1024 * 1024
    backup_count: int = 3
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))


# =============================================================================
# PROCESSORS
# =============================================================================

def add_trace_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Attach the active span's ids, if any."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
    return event_dict


def add_service_context(service_name: str, environment: str) -> Processor:
    def processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


# =============================================================================
# SETUP
# =============================================================================

def setup_logging(config: Optional[LoggingConfig] = None, force: bool = False) -> None:
    """
    Configure structlog and the root stdlib logger.

    Args:
        config: Settings to apply; read from the environment when omitted
        force: Reconfigure even if logging is already set up
    """
    global _configured
    if _configured and not force:
        return

    config = config or LoggingConfig()

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_context(config.service_name, config.environment),
        add_timestamp,
    ]
    if config.enable_trace_context:
        processors.append(add_trace_context)
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if config.json_format:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    _install_handlers(config)
    _configured = True


def _install_handlers(config: LoggingConfig) -> None:
    level = logging.getLevelName(config.level)
    if not isinstance(level, int):
        level = logging.WARNING

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_to_file:
        config.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            config.log_file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        ))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Logger for a module, configuring logging with defaults on first use.

    Loggers are lazy proxies, so one obtained at import time still follows
    a later setup_logging(force=True).
    """
    if not _configured:
        setup_logging()
    return structlog.get_logger(name)


def shutdown_logging() -> None:
    """Flush and close the root handlers."""
    global _configured
    for handler in logging.getLogger().handlers:
        handler.flush()
        handler.close()
    _configured = False


# =============================================================================
# CONTEXT
# =============================================================================

class LogContext:
    """
    Bind fields to every event logged inside the block.

    Works with both `with` and `async with`:

        async with LogContext(translation_id="kjv"):
            logger.info("Fetching translation")
    """

    def __init__(self, **fields: Any):
        self.fields: Dict[str, Any] = fields

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.fields)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.fields)

    async def __aenter__(self) -> "LogContext":
        return self.__enter__()

    async def __aexit__(self, *exc_info: Any) -> None:
        self.__exit__(*exc_info)


def bind_context(**fields: Any) -> None:
    structlog.contextvars.bind_contextvars(**fields)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
