"""
LECTIO - Error Hierarchy

Only two parts of the reader can fail: reading configuration and loading
translations. Everything in the navigation core has a defined result for
its edge cases (empty corpus, out-of-range index, unknown history key,
short search term) and raises nothing.

Each LectioError carries a code, a severity and an optional ErrorContext,
and marks the active OpenTelemetry span as failed when it is created.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode


class ErrorSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _span_ids() -> Dict[str, Optional[str]]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {"trace_id": None, "span_id": None}
    return {
        "trace_id": format(span_context.trace_id, "032x"),
        "span_id": format(span_context.span_id, "016x"),
    }


@dataclass
class ErrorContext:
    """Where an error happened, for logs and span attributes."""

    operation: str
    component: str
    translation_id: Optional[str] = None
    trace_id: Optional[str] = None
    span_id: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def capture(cls, operation: str, component: str, **kwargs: Any) -> "ErrorContext":
        """Context stamped with the ids of the active span, if one is recording."""
        return cls(operation, component, **{**_span_ids(), **kwargs})

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["occurred_at"] = self.occurred_at.isoformat()
        return data


class LectioError(Exception):
    """
    Base class for reader errors.

    Args:
        message: Human readable description, shown by the CLI
        context: Where the error happened
        severity: Overrides the class default
        cause: Underlying exception, if any
        recoverable: Whether retrying (e.g. a reload) can succeed
        suggestions: Hints for the user
    """

    error_code: str = "LECTIO_ERROR"
    default_severity = ErrorSeverity.ERROR
    default_recoverable = False

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        severity: Optional[ErrorSeverity] = None,
        cause: Optional[BaseException] = None,
        recoverable: Optional[bool] = None,
        suggestions: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context
        self.cause = cause
        self.severity = severity if severity is not None else self.default_severity
        self.recoverable = self.default_recoverable if recoverable is None else recoverable
        self.suggestions = suggestions if suggestions is not None else self.default_suggestions()
        self._mark_span()

    def default_suggestions(self) -> List[str]:
        return []

    def _mark_span(self) -> None:
        span = trace.get_current_span()
        if not span.is_recording():
            return
        attributes = {
            "error.code": self.error_code,
            "error.severity": self.severity.value,
            "error.recoverable": self.recoverable,
        }
        if self.context is not None:
            attributes["error.component"] = self.context.component
            attributes["error.operation"] = self.context.operation
        span.set_attributes(attributes)
        span.record_exception(self)
        span.set_status(Status(StatusCode.ERROR, self.message))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recoverable": self.recoverable,
            "suggestions": list(self.suggestions),
            "context": None if self.context is None else self.context.to_dict(),
            "cause": None if self.cause is None else repr(self.cause),
        }

    def __str__(self) -> str:
        if self.cause is None:
            return f"[{self.error_code}] {self.message}"
        return f"[{self.error_code}] {self.message} (caused by {type(self.cause).__name__}: {self.cause})"


class LectioConfigError(LectioError):
    """An environment setting is malformed or out of range."""

    error_code = "CONFIG_ERROR"
    default_severity = ErrorSeverity.CRITICAL

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[Type] = None,
        actual_value: Any = None,
        **options: Any,
    ):
        self.config_key = config_key
        self.expected_type = expected_type
        self.actual_value = actual_value
        super().__init__(message, **options)

    def default_suggestions(self) -> List[str]:
        return [f"Fix or unset {self.config_key}"] if self.config_key else []


class CorpusLoadError(LectioError):
    """A translation could not be read, fetched or decoded."""

    error_code = "CORPUS_LOAD_ERROR"
    default_recoverable = True

    def __init__(
        self,
        message: str,
        translation_id: Optional[str] = None,
        source: Optional[str] = None,
        **options: Any,
    ):
        self.translation_id = translation_id
        self.source = source
        super().__init__(message, **options)

    def default_suggestions(self) -> List[str]:
        return ["Reload once the source is reachable"]
