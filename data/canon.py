"""
LECTIO - Canon Reference Data

Compiled-in metadata for the 66 books of the Protestant canon, in the same
order as the translation corpora. The tables here are closed reference data:
they are never mutated and never read from user input.

Two indices are derived from BOOK_METADATA:
- TESTAMENT_ORDER: the testaments in canonical order
- CATEGORIES_BY_TESTAMENT: for each testament, the categories occurring in
  it, in order of first appearance

A category is legal for a testament iff it appears in that testament's list.
"History" is legal for both (Acts is a New Testament history book).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class Testament(str, Enum):
    """Testament designation."""
    OLD = "OT"
    NEW = "NT"


class BookCategory(str, Enum):
    """Closed set of book categories."""
    PENTATEUCH = "Pentateuch"
    HISTORY = "History"
    WISDOM = "Wisdom"
    MAJOR_PROPHETS = "Major Prophets"
    MINOR_PROPHETS = "Minor Prophets"
    GOSPELS = "Gospels"
    PAULINE_EPISTLES = "Pauline Epistles"
    GENERAL_EPISTLES = "General Epistles"
    REVELATION = "Revelation"


@dataclass(frozen=True)
class BookMetadata:
    """Static classification of one canonical book."""
    name: str
    testament: Testament
    category: BookCategory


def _books(testament: Testament, category: BookCategory, *names: str) -> List[BookMetadata]:
    return [BookMetadata(name, testament, category) for name in names]


_OT = Testament.OLD
_NT = Testament.NEW

BOOK_METADATA: Tuple[BookMetadata, ...] = tuple(
    _books(_OT, BookCategory.PENTATEUCH,
           "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy")
    + _books(_OT, BookCategory.HISTORY,
             "Joshua", "Judges", "Ruth", "1 Samuel", "2 Samuel", "1 Kings",
             "2 Kings", "1 Chronicles", "2 Chronicles", "Ezra", "Nehemiah", "Esther")
    + _books(_OT, BookCategory.WISDOM,
             "Job", "Psalms", "Proverbs", "Ecclesiastes", "Song of Solomon")
    + _books(_OT, BookCategory.MAJOR_PROPHETS,
             "Isaiah", "Jeremiah", "Lamentations", "Ezekiel", "Daniel")
    + _books(_OT, BookCategory.MINOR_PROPHETS,
             "Hosea", "Joel", "Amos", "Obadiah", "Jonah", "Micah", "Nahum",
             "Habakkuk", "Zephaniah", "Haggai", "Zechariah", "Malachi")
    + _books(_NT, BookCategory.GOSPELS, "Matthew", "Mark", "Luke", "John")
    + _books(_NT, BookCategory.HISTORY, "Acts")
    + _books(_NT, BookCategory.PAULINE_EPISTLES,
             "Romans", "1 Corinthians", "2 Corinthians", "Galatians", "Ephesians",
             "Philippians", "Colossians", "1 Thessalonians", "2 Thessalonians",
             "1 Timothy", "2 Timothy", "Titus", "Philemon")
    + _books(_NT, BookCategory.GENERAL_EPISTLES,
             "Hebrews", "James", "1 Peter", "2 Peter", "1 John", "2 John",
             "3 John", "Jude")
    + _books(_NT, BookCategory.REVELATION, "Revelation")
)

TESTAMENT_ORDER: Tuple[Testament, ...] = (Testament.OLD, Testament.NEW)

TESTAMENT_LABELS: Dict[Testament, str] = {
    Testament.OLD: "Old Testament",
    Testament.NEW: "New Testament",
}


def _build_category_map(metadata: Tuple[BookMetadata, ...]) -> Dict[Testament, Tuple[BookCategory, ...]]:
    categories: Dict[Testament, List[BookCategory]] = {t: [] for t in TESTAMENT_ORDER}
    for meta in metadata:
        if meta.category not in categories[meta.testament]:
            categories[meta.testament].append(meta.category)
    return {t: tuple(cats) for t, cats in categories.items()}


CATEGORIES_BY_TESTAMENT: Dict[Testament, Tuple[BookCategory, ...]] = _build_category_map(BOOK_METADATA)


def category_is_legal(testament: Testament, category: BookCategory) -> bool:
    """Check whether a category occurs in the given testament."""
    return category in CATEGORIES_BY_TESTAMENT[testament]


def book_name(book_index: int) -> str:
    """Canonical English name for a book index, or "Book" when out of range."""
    if 0 <= book_index < len(BOOK_METADATA):
        return BOOK_METADATA[book_index].name
    return "Book"
