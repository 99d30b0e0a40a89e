"""
LECTIO - Core Module

Foundational pieces shared by every other package:
- Unified error handling
- Type definitions

Usage:
    from core import LectioError, CorpusLoadError, LocationKey
"""
from core.errors import (
    CorpusLoadError,
    ErrorContext,
    ErrorSeverity,
    LectioConfigError,
    LectioError,
)
from core.types import HighlightSegmentDict, LocationKey, RawBookDict, TranslationId

__all__ = [
    # Errors
    "CorpusLoadError",
    "ErrorContext",
    "ErrorSeverity",
    "LectioConfigError",
    "LectioError",
    # Types
    "HighlightSegmentDict",
    "LocationKey",
    "RawBookDict",
    "TranslationId",
]
