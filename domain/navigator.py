"""
LECTIO - Navigator State Machine

Keeps the committed selection of the cascading navigator and a transient
hover preview apart.

States:
    IDLE      committed path only
    HOVERING  committed path plus a preview path

Transitions:
    hover(edit)    -> HOVERING  preview = edit merged over the active path
    leave_hover()  -> IDLE      preview discarded
    commit(edit)   -> IDLE      committed = edit merged over the active path,
                                location recorded in history

The active path (preview while hovering, else committed) drives the menu
columns. The reading pane follows the committed path only, so hovering never
touches history or the reading view.

Every derived path is clamped against the canonical corpus and the
testament/category filters. While the corpus snapshot is pending or failed,
hover and commit are ignored and the last committed path stays in place.

Usage:
    navigator = Navigator(snapshot.books("kjv"), history=HistoryTracker())
    navigator.hover(PathEdit(location=LocationEdit(book_index=42)))
    navigator.commit(PathEdit(location=LocationEdit(book_index=42, chapter_index=2, verse_index=15)))
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from data.canon import (
    BOOK_METADATA,
    CATEGORIES_BY_TESTAMENT,
    TESTAMENT_ORDER,
    BookCategory,
    BookMetadata,
    Testament,
)
from data.schemas import BookDescriptor, Corpus, CorpusSnapshot
from domain.hierarchy import (
    ALL,
    CategoryFilter,
    TestamentFilter,
    books_matching,
    resolve_filter_change,
    sanitize_category,
)
from domain.history import HistoryTracker
from domain.location import (
    START,
    UNSET,
    Location,
    LocationEdit,
    Unset,
    clamp,
    compose_location_edit,
)
from observability import get_logger

logger = get_logger(__name__)

MAX_VERSES_IN_MENU = 60
MAX_VERSE_LABEL_LENGTH = 90


class NavigatorState(str, Enum):
    IDLE = "idle"
    HOVERING = "hovering"


@dataclass(frozen=True)
class NavigatorPath:
    """A filter pair plus a location: either the selection or a preview."""
    testament: TestamentFilter = ALL
    category: CategoryFilter = ALL
    location: Location = START


@dataclass(frozen=True)
class PathEdit:
    """Partial NavigatorPath. UNSET filters keep their current value."""
    testament: Union[TestamentFilter, Unset] = UNSET
    category: Union[CategoryFilter, Unset] = UNSET
    location: LocationEdit = field(default_factory=LocationEdit)

    @classmethod
    def to(cls, location: Location) -> "PathEdit":
        """Edit jumping straight to a location, keeping the filters."""
        return cls(location=LocationEdit.to(location))


# =============================================================================
# MENU VIEW MODEL
# =============================================================================

@dataclass(frozen=True)
class MenuBook:
    index: int
    name: str
    chapter_count: int
    active: bool


@dataclass(frozen=True)
class MenuChapter:
    index: int
    verse_count: int
    active: bool


@dataclass(frozen=True)
class MenuVerse:
    index: int
    label: str
    active: bool


@dataclass(frozen=True)
class MenuView:
    """The columns of the cascading menu, derived from the active path."""
    testaments: Tuple[Testament, ...]
    categories: Tuple[BookCategory, ...]
    books: Tuple[MenuBook, ...]
    chapters: Tuple[MenuChapter, ...]
    verses: Tuple[MenuVerse, ...]
    verses_truncated: bool
    active_book_name: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.books


def make_verse_label(text: str, limit: int = MAX_VERSE_LABEL_LENGTH) -> str:
    """Shorten verse text for a menu entry."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}…"


# =============================================================================
# STATE MACHINE
# =============================================================================

class Navigator:
    """
    Committed/preview navigation over one canonical translation.

    Args:
        books: Canonical translation books; None while the corpus is unavailable
        history: Tracker receiving every committed location
        metadata: Static book metadata, in corpus order
        menu_verse_limit: Verses listed in the menu's verse column
        menu_label_length: Characters of verse text shown per menu entry
    """

    def __init__(
        self,
        books: Optional[Corpus] = (),
        history: Optional[HistoryTracker] = None,
        metadata: Sequence[BookMetadata] = BOOK_METADATA,
        menu_verse_limit: int = MAX_VERSES_IN_MENU,
        menu_label_length: int = MAX_VERSE_LABEL_LENGTH,
    ):
        self.history = history
        self.metadata = metadata
        self.menu_verse_limit = menu_verse_limit
        self.menu_label_length = menu_label_length

        self._books: Optional[Tuple[BookDescriptor, ...]] = tuple(books) if books is not None else None
        self._committed = NavigatorPath(location=self._clamp(START))
        self._preview: Optional[NavigatorPath] = None

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def state(self) -> NavigatorState:
        return NavigatorState.IDLE if self._preview is None else NavigatorState.HOVERING

    @property
    def is_hovering(self) -> bool:
        return self._preview is not None

    @property
    def committed_path(self) -> NavigatorPath:
        return self._committed

    @property
    def preview_path(self) -> Optional[NavigatorPath]:
        return self._preview

    @property
    def active_path(self) -> NavigatorPath:
        return self._preview if self._preview is not None else self._committed

    @property
    def books(self) -> Tuple[BookDescriptor, ...]:
        return self._books or ()

    @property
    def corpus_available(self) -> bool:
        return self._books is not None

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def hover(self, edit: PathEdit) -> NavigatorPath:
        """Preview a path without committing it."""
        if not self.corpus_available:
            logger.debug("Hover ignored, corpus unavailable")
            return self.active_path
        self._preview = self._derive(self.active_path, edit)
        return self._preview

    def leave_hover(self) -> NavigatorPath:
        """Drop the preview and fall back to the committed path."""
        self._preview = None
        return self._committed

    def commit(self, edit: PathEdit) -> NavigatorPath:
        """Make a path the selection and record its location in history."""
        if not self.corpus_available:
            logger.info("Commit ignored, corpus unavailable")
            return self._committed

        path = self._derive(self.active_path, edit)
        self._committed = path
        self._preview = None

        if self.history is not None:
            self.history.record(path.location)

        logger.debug(
            "Location committed",
            key=path.location.key,
            testament=path.testament.value,
            category=path.category.value,
        )
        return path

    def update_corpus(self, snapshot: CorpusSnapshot, translation_id: str) -> None:
        """
        Adopt a new corpus snapshot.

        A ready snapshot re-clamps the committed and preview paths against the
        new books. Anything else freezes navigation on the last committed path.
        """
        if not snapshot.is_ready:
            self._books = None
            logger.info("Navigation frozen", status=snapshot.status.value, error=snapshot.error)
            return

        self._books = snapshot.books(translation_id)
        self._committed = replace(self._committed, location=self._clamp(self._committed.location))
        if self._preview is not None:
            self._preview = replace(self._preview, location=self._clamp(self._preview.location))

    # -------------------------------------------------------------------------
    # Derivation
    # -------------------------------------------------------------------------

    def _derive(self, base: NavigatorPath, edit: PathEdit) -> NavigatorPath:
        testament = base.testament if edit.testament is UNSET else edit.testament
        category = base.category if edit.category is UNSET else edit.category
        proposed = compose_location_edit(base.location, edit.location)

        filters_changed = testament is not base.testament or category is not base.category
        if filters_changed:
            category, book_index = resolve_filter_change(
                testament,
                category,
                prior_book_index=proposed.book_index,
                fallback_book_index=self._committed.location.book_index,
                metadata=self._loaded_metadata(),
            )
            if book_index != proposed.book_index:
                proposed = compose_location_edit(proposed, LocationEdit(book_index=book_index))
        else:
            category = sanitize_category(testament, category)
            if edit.location.book_index is not UNSET and not self._in_filters(
                testament, category, proposed.book_index
            ):
                logger.debug("Filters widened for explicit book", book=proposed.book_index)
                testament, category = ALL, ALL

        return NavigatorPath(testament=testament, category=category, location=self._clamp(proposed))

    def _in_filters(self, testament: TestamentFilter, category: CategoryFilter, book_index: int) -> bool:
        if testament is ALL and category is ALL:
            return True
        return book_index in books_matching(testament, category, self._loaded_metadata())

    def _loaded_metadata(self) -> Sequence[BookMetadata]:
        """Metadata of the books present in the corpus; filters never pick past its end."""
        return self.metadata[: len(self.books)]

    def _clamp(self, location: Location) -> Location:
        return clamp(location, self.books)

    # -------------------------------------------------------------------------
    # Menu
    # -------------------------------------------------------------------------

    def visible_book_indices(self, path: Optional[NavigatorPath] = None) -> List[int]:
        """Corpus indices of the books the given (default: active) path's filters allow."""
        path = path or self.active_path
        if path.testament is ALL and path.category is ALL:
            return list(range(len(self.books)))
        return books_matching(path.testament, path.category, self._loaded_metadata())

    def category_options(self, testament: TestamentFilter) -> Tuple[BookCategory, ...]:
        """Categories selectable under a testament filter."""
        if testament is not ALL:
            return CATEGORIES_BY_TESTAMENT[testament]
        seen: List[BookCategory] = []
        for t in TESTAMENT_ORDER:
            seen.extend(c for c in CATEGORIES_BY_TESTAMENT[t] if c not in seen)
        return tuple(seen)

    def menu(self) -> MenuView:
        """Columns of the cascading menu for the active path."""
        path = self.active_path
        location = path.location
        books = self.books

        book_items = tuple(
            MenuBook(
                index=i,
                name=books[i].display_name,
                chapter_count=books[i].chapter_count,
                active=i == location.book_index,
            )
            for i in self.visible_book_indices(path)
        )

        active_book = books[location.book_index] if 0 <= location.book_index < len(books) else None
        chapters = active_book.chapters if active_book else ()
        verses = active_book.verses(location.chapter_index) if active_book else ()

        return MenuView(
            testaments=TESTAMENT_ORDER,
            categories=self.category_options(path.testament),
            books=book_items,
            chapters=tuple(
                MenuChapter(index=i, verse_count=len(chapter), active=i == location.chapter_index)
                for i, chapter in enumerate(chapters)
            ),
            verses=tuple(
                MenuVerse(
                    index=i,
                    label=make_verse_label(text, self.menu_label_length),
                    active=i == location.verse_index,
                )
                for i, text in enumerate(verses[:self.menu_verse_limit])
            ),
            verses_truncated=len(verses) > self.menu_verse_limit,
            active_book_name=active_book.display_name if active_book else None,
        )
