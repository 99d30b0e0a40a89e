"""
LECTIO - Data Schemas

Schemas for the corpus delivered by the loading collaborator.

Translation sources are JSON arrays of books:

    [{"abbrev": "gn", "name": "Genesis", "chapters": [["In the beginning...", ...], ...]}, ...]

Raw records are validated with Pydantic and converted into immutable
BookDescriptor values. The navigation core only ever reads BookDescriptors.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter

from core.types import RawBookDict


# =============================================================================
# BOOK DESCRIPTOR - the shape the core reads
# =============================================================================

@dataclass(frozen=True)
class BookDescriptor:
    """
    One book of one translation.

    Example:
        BookDescriptor(
            short_id="gn",
            display_name="Genesis",
            chapters=(("In the beginning God created...", ...), ...),
        )
    """
    short_id: str
    display_name: str
    chapters: Tuple[Tuple[str, ...], ...] = ()

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    def verses(self, chapter_index: int) -> Tuple[str, ...]:
        """Verses of a chapter, or an empty tuple when the chapter is absent."""
        if 0 <= chapter_index < len(self.chapters):
            return self.chapters[chapter_index]
        return ()

    def to_dict(self) -> RawBookDict:
        """Convert back to the source JSON shape."""
        return {
            "abbrev": self.short_id,
            "name": self.display_name,
            "chapters": [list(chapter) for chapter in self.chapters],
        }


Corpus = Sequence[BookDescriptor]


# =============================================================================
# RAW RECORD VALIDATION
# =============================================================================

class BookRecord(BaseModel):
    """Pydantic model for a raw book record in a translation source."""
    abbrev: str = Field(min_length=1)
    name: str = Field(min_length=1)
    chapters: List[List[str]] = Field(default_factory=list)

    def to_descriptor(self) -> BookDescriptor:
        return BookDescriptor(
            short_id=self.abbrev,
            display_name=self.name,
            chapters=tuple(tuple(chapter) for chapter in self.chapters),
        )


_BOOK_LIST_ADAPTER = TypeAdapter(List[BookRecord])


def parse_books(payload: Any) -> List[BookDescriptor]:
    """
    Validate decoded JSON and convert it into book descriptors.

    Raises:
        pydantic.ValidationError: If the payload does not match the source shape
    """
    records = _BOOK_LIST_ADAPTER.validate_python(payload)
    return [record.to_descriptor() for record in records]


def strip_bom(text: str) -> str:
    """Remove a leading UTF-8 byte order mark, which some sources carry."""
    return text[1:] if text.startswith("\ufeff") else text


# =============================================================================
# CORPUS SNAPSHOT - what the loading collaborator hands to the core
# =============================================================================

class CorpusStatus(str, Enum):
    """Load state of a corpus snapshot."""
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class CorpusSnapshot:
    """
    Immutable view of every loaded translation at one point in time.

    A FAILED snapshot may still carry the books of the previous snapshot so
    the view layer can keep rendering them; the core treats it as unusable.
    """
    status: CorpusStatus = CorpusStatus.PENDING
    books_by_translation: Mapping[str, Tuple[BookDescriptor, ...]] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def pending(cls) -> "CorpusSnapshot":
        return cls(status=CorpusStatus.PENDING)

    @classmethod
    def ready(cls, books_by_translation: Mapping[str, Sequence[BookDescriptor]]) -> "CorpusSnapshot":
        return cls(
            status=CorpusStatus.READY,
            books_by_translation={tid: tuple(books) for tid, books in books_by_translation.items()},
        )

    @classmethod
    def failed(cls, reason: str, previous: Optional["CorpusSnapshot"] = None) -> "CorpusSnapshot":
        return cls(
            status=CorpusStatus.FAILED,
            books_by_translation=dict(previous.books_by_translation) if previous else {},
            error=reason,
        )

    @property
    def is_ready(self) -> bool:
        return self.status is CorpusStatus.READY

    def books(self, translation_id: str) -> Tuple[BookDescriptor, ...]:
        """Books of a translation, or an empty tuple if it is not loaded."""
        return self.books_by_translation.get(translation_id, ())

    def get_books(self, translation_id: str) -> Union[Tuple[BookDescriptor, ...], CorpusStatus]:
        """Books of a ready snapshot, otherwise the snapshot status."""
        if not self.is_ready:
            return self.status
        return self.books(translation_id)
