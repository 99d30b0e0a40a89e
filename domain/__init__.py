"""
LECTIO - Domain Layer

The navigation core of the reader. Everything here is synchronous and works
on immutable corpus snapshots handed over by the data layer.

- location.py: locations, partial edits and clamping
- hierarchy.py: testament and category filters
- navigator.py: committed selection versus hover preview
- history.py: recently viewed locations with multi-select
- search.py: substring search and highlighting
- reader.py: the session tying these together for a view
"""
from domain.hierarchy import ALL, books_matching, resolve_filter_change, sanitize_category
from domain.history import HistoryEntry, HistoryItem, HistoryTracker
from domain.location import (
    START,
    UNSET,
    Location,
    LocationEdit,
    clamp,
    compose_location_edit,
    format_location,
    location_key,
)
from domain.navigator import MenuView, Navigator, NavigatorPath, NavigatorState, PathEdit
from domain.reader import ReaderSession, VerseRow, VerseStackBlock
from domain.search import HighlightSegment, SearchMatch, highlight, search

__all__ = [
    "ALL",
    "START",
    "UNSET",
    "HighlightSegment",
    "HistoryEntry",
    "HistoryItem",
    "HistoryTracker",
    "Location",
    "LocationEdit",
    "MenuView",
    "Navigator",
    "NavigatorPath",
    "NavigatorState",
    "PathEdit",
    "ReaderSession",
    "SearchMatch",
    "VerseRow",
    "VerseStackBlock",
    "books_matching",
    "clamp",
    "compose_location_edit",
    "format_location",
    "highlight",
    "location_key",
    "resolve_filter_change",
    "sanitize_category",
    "search",
]
