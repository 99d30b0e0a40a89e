"""
LECTIO - Centralized Type Definitions

Type aliases and TypedDicts shared across the reader.

Usage:
    from core.types import LocationKey, TranslationId, RawBookDict
"""
from __future__ import annotations

from typing import List, TypedDict

# =============================================================================
# TYPE ALIASES - Simple type shortcuts
# =============================================================================

LocationKey = str  # Format: "BOOK-CHAPTER-VERSE|all" (e.g., "0-0-all", "42-2-15")
TranslationId = str  # e.g., "kjv", "bbe"


# =============================================================================
# TYPED DICTS - Structured dictionaries with type hints
# =============================================================================


class RawBookDict(TypedDict):
    """A book as it appears in the translation JSON sources."""
    abbrev: str
    name: str
    chapters: List[List[str]]


class HighlightSegmentDict(TypedDict):
    """Dictionary representation of a highlighted text segment."""
    text: str
    is_match: bool
