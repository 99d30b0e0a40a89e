"""
LECTIO - Location Model

A Location is a position in the book -> chapter -> verse hierarchy of the
canonical translation. A missing verse index means "whole chapter view".

Two pure functions keep locations valid:

    compose_location_edit(current, changes)  # merge a partial edit
    clamp(proposed, corpus)                  # force into the corpus bounds

compose_location_edit must run before clamp. Moving to a new book resets the
chapter to 0, and moving to a new book or chapter deselects the verse unless
the edit re-selects one explicitly.

Usage:
    from domain.location import Location, LocationEdit, clamp, compose_location_edit

    proposed = compose_location_edit(current, LocationEdit(book_index=3))
    location = clamp(proposed, canonical_books)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from core.types import LocationKey
from data.schemas import Corpus


class Unset(Enum):
    """Marker for an edit field the caller did not supply."""
    TOKEN = 0

    def __repr__(self) -> str:
        return "UNSET"


UNSET = Unset.TOKEN


# =============================================================================
# VALUE OBJECTS
# =============================================================================

@dataclass(frozen=True)
class Location:
    """A (possibly not yet validated) position in the corpus."""
    book_index: int
    chapter_index: int
    verse_index: Optional[int] = None

    @property
    def has_verse(self) -> bool:
        return self.verse_index is not None

    @property
    def key(self) -> LocationKey:
        return location_key(self)


@dataclass(frozen=True)
class LocationEdit:
    """
    A partial Location.

    Each field is either UNSET (keep or derive from the current location) or
    a value. verse_index may be explicitly None, which selects the whole
    chapter and is different from leaving it UNSET.
    """
    book_index: Union[int, Unset] = UNSET
    chapter_index: Union[int, Unset] = UNSET
    verse_index: Union[int, None, Unset] = UNSET

    @classmethod
    def to(cls, location: Location) -> "LocationEdit":
        """An edit that names every field of the given location."""
        return cls(
            book_index=location.book_index,
            chapter_index=location.chapter_index,
            verse_index=location.verse_index,
        )


START = Location(book_index=0, chapter_index=0, verse_index=None)


# =============================================================================
# OPERATIONS
# =============================================================================

def location_key(location: Location) -> LocationKey:
    """Deterministic key for a location, e.g. "0-0-all" or "42-2-15"."""
    verse = "all" if location.verse_index is None else str(location.verse_index)
    return f"{location.book_index}-{location.chapter_index}-{verse}"


def format_location(location: Location, book_name: Optional[str] = None) -> str:
    """Human label such as "John 3:16" or "Genesis 1" (indices are 0-based)."""
    verse = f":{location.verse_index + 1}" if location.verse_index is not None else ""
    return f"{book_name or 'Book'} {location.chapter_index + 1}{verse}"


def compose_location_edit(current: Location, changes: LocationEdit) -> Location:
    """
    Merge a partial edit over the current location (pre-clamp).

    Args:
        current: The location being edited
        changes: Fields to change; UNSET fields are derived

    Returns:
        The proposed location, not yet clamped against a corpus
    """
    book_changed = changes.book_index is not UNSET
    chapter_changed = changes.chapter_index is not UNSET

    book_index = changes.book_index if book_changed else current.book_index

    if chapter_changed:
        chapter_index = changes.chapter_index
    elif book_changed:
        chapter_index = 0
    else:
        chapter_index = current.chapter_index

    if changes.verse_index is not UNSET:
        verse_index = changes.verse_index
    elif book_changed or chapter_changed:
        verse_index = None
    else:
        verse_index = current.verse_index

    return Location(book_index=book_index, chapter_index=chapter_index, verse_index=verse_index)


def clamp(proposed: Location, corpus: Corpus) -> Location:
    """
    Force a location into the bounds of a concrete corpus.

    An empty corpus cannot validate anything, so the proposed location is
    returned unchanged as a deferred value. A book with no chapters is
    treated as having one empty chapter. The verse is dropped when none was
    proposed or the resolved chapter has no verses.

    Args:
        proposed: Any location, including negative or overflowing indices
        corpus: Books of the canonical translation

    Returns:
        A location valid against the corpus
    """
    if not corpus:
        return proposed

    book_index = _clamp_index(proposed.book_index, len(corpus))
    book = corpus[book_index]

    chapter_index = _clamp_index(proposed.chapter_index, max(1, book.chapter_count))
    verses = book.verses(chapter_index)

    if proposed.verse_index is None or not verses:
        verse_index = None
    else:
        verse_index = _clamp_index(proposed.verse_index, len(verses))

    return Location(book_index=book_index, chapter_index=chapter_index, verse_index=verse_index)


def is_valid(location: Location, corpus: Corpus) -> bool:
    """Check a location against the validity invariant for a non-empty corpus."""
    if not 0 <= location.book_index < len(corpus):
        return False
    book = corpus[location.book_index]
    if not 0 <= location.chapter_index < max(1, book.chapter_count):
        return False
    if location.verse_index is None:
        return True
    return 0 <= location.verse_index < len(book.verses(location.chapter_index))


def _clamp_index(value: int, count: int) -> int:
    return min(count - 1, max(0, value))
