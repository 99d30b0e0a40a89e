"""
LECTIO - Reader Session

Wires the navigator, history, search and translation choice into the state
the view layer renders: the cascading menu, the recently viewed list, the
search results and the stack of parallel-translation verse blocks.

The canonical translation defines valid locations. Other active translations
are read against the same location and may simply lack a verse.

Usage:
    session = ReaderSession(snapshot)
    session.navigate(Location(42, 2, 15))
    for block in session.verse_stack():
        ...
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from config import ReaderConfig, get_config
from core.types import LocationKey, TranslationId
from data.canon import BOOK_METADATA, BookMetadata, book_name as canonical_book_name
from data.schemas import CorpusSnapshot
from data.translations import CANONICAL_TRANSLATION_ID, TRANSLATION_DEFINITIONS, TranslationDefinition
from domain.history import HistoryTracker
from domain.location import Location, clamp, format_location, location_key
from domain.navigator import Navigator, NavigatorPath, PathEdit
from domain.search import HighlightSegment, SearchMatch, highlight, search
from observability import get_logger

logger = get_logger(__name__)

DEFAULT_ACTIVE_TRANSLATIONS = 2


@dataclass(frozen=True)
class VerseCell:
    translation: TranslationDefinition
    text: Optional[str]


@dataclass(frozen=True)
class VerseRow:
    """One verse number across the active translations."""
    verse_index: int
    cells: Tuple[VerseCell, ...]

    @property
    def present(self) -> Tuple[VerseCell, ...]:
        return tuple(cell for cell in self.cells if cell.text)


@dataclass(frozen=True)
class VerseStackBlock:
    """A chapter block in the reading pane, with the target verse marked."""
    key: LocationKey
    location: Location
    label: str
    rows: Tuple[VerseRow, ...]


@dataclass(frozen=True)
class RecentItem:
    key: LocationKey
    location: Location
    label: str
    selected: bool


class ReaderSession:
    """
    Long-lived per-reader state.

    Args:
        snapshot: Initial corpus snapshot (pending until the loader delivers)
        config: Reader limits; defaults to the global configuration
        definitions: Available translations, canonical first
        metadata: Static book metadata, in corpus order
    """

    def __init__(
        self,
        snapshot: Optional[CorpusSnapshot] = None,
        config: Optional[ReaderConfig] = None,
        definitions: Sequence[TranslationDefinition] = TRANSLATION_DEFINITIONS,
        metadata: Sequence[BookMetadata] = BOOK_METADATA,
    ):
        self.config = config or get_config().reader
        self.definitions = tuple(definitions)
        self.canonical_id = self.definitions[0].id if self.definitions else CANONICAL_TRANSLATION_ID
        self.snapshot = snapshot or CorpusSnapshot.pending()

        self.history = HistoryTracker(limit=self.config.history_limit)
        self.navigator = Navigator(
            books=self.snapshot.books(self.canonical_id) if self.snapshot.is_ready else None,
            history=self.history,
            metadata=metadata,
            menu_verse_limit=self.config.menu_verse_limit,
            menu_label_length=self.config.menu_label_length,
        )
        self.active_translations: List[TranslationId] = [
            d.id for d in self.definitions[:min(DEFAULT_ACTIVE_TRANSLATIONS, self.config.max_translations)]
        ]
        self.search_term = ""

    # -------------------------------------------------------------------------
    # Corpus
    # -------------------------------------------------------------------------

    def update_corpus(self, snapshot: CorpusSnapshot) -> None:
        """Adopt a snapshot delivered by the corpus loader."""
        self.snapshot = snapshot
        self.navigator.update_corpus(snapshot, self.canonical_id)

    @property
    def canonical_books(self):
        return self.navigator.books

    def book_name(self, book_index: int) -> Optional[str]:
        books = self.canonical_books
        if 0 <= book_index < len(books):
            return books[book_index].display_name
        return None

    def label(self, location: Location) -> str:
        return format_location(
            location,
            self.book_name(location.book_index) or canonical_book_name(location.book_index),
        )

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def location(self) -> Location:
        return self.navigator.committed_path.location

    def navigate(self, location: Location) -> NavigatorPath:
        """Jump to a location, e.g. from a search result or a history entry."""
        return self.navigator.commit(PathEdit.to(location))

    # -------------------------------------------------------------------------
    # Translations
    # -------------------------------------------------------------------------

    def translation(self, translation_id: str) -> Optional[TranslationDefinition]:
        for definition in self.definitions:
            if definition.id == translation_id:
                return definition
        return None

    def toggle_translation(self, translation_id: str) -> List[str]:
        """
        Show or hide a translation.

        The last visible translation cannot be hidden, and no more than
        max_translations can be shown at once.
        """
        if self.translation(translation_id) is None:
            return list(self.active_translations)

        if translation_id in self.active_translations:
            if len(self.active_translations) > 1:
                self.active_translations.remove(translation_id)
        elif len(self.active_translations) < self.config.max_translations:
            self.active_translations.append(translation_id)
        else:
            logger.debug("Translation limit reached", limit=self.config.max_translations)

        return list(self.active_translations)

    def select_translations(self, translation_ids: Sequence[str]) -> List[str]:
        """Replace the visible translations, dropping unknown ids and duplicates."""
        selected: List[str] = []
        for translation_id in translation_ids:
            if self.translation(translation_id) is not None and translation_id not in selected:
                selected.append(translation_id)
        self.active_translations = selected[:self.config.max_translations] or [self.canonical_id]
        return list(self.active_translations)

    def verse_rows(self, location: Location) -> List[VerseRow]:
        """Parallel rows of the location's chapter across active translations."""
        if not self.snapshot.is_ready:
            return []

        target = clamp(location, self.canonical_books)
        columns = []
        for translation_id in self.active_translations:
            definition = self.translation(translation_id)
            books = self.snapshot.books(translation_id)
            book = books[target.book_index] if 0 <= target.book_index < len(books) else None
            columns.append((definition, book.verses(target.chapter_index) if book else ()))

        verse_count = max((len(verses) for _, verses in columns), default=0)
        rows = []
        for index in range(verse_count):
            row = VerseRow(
                verse_index=index,
                cells=tuple(
                    VerseCell(definition, verses[index] if index < len(verses) else None)
                    for definition, verses in columns
                ),
            )
            if row.present:
                rows.append(row)
        return rows

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def recent_items(self) -> List[RecentItem]:
        return [
            RecentItem(
                key=item.key,
                location=item.entry.location,
                label=self.label(item.entry.location),
                selected=item.selected,
            )
            for item in self.history.entries()
        ]

    def verse_stack(self) -> List[VerseStackBlock]:
        """
        Blocks for the reading pane.

        One block per selected history entry; without a selection, a single
        block for the committed location if it has a verse; otherwise none.
        """
        targets = [entry.location for entry in self.history.selected_entries()]
        if not targets and self.location.has_verse:
            targets = [self.location]

        return [
            VerseStackBlock(
                key=location_key(location),
                location=location,
                label=self.label(location),
                rows=tuple(self.verse_rows(location)),
            )
            for location in targets
        ]

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def set_search_term(self, term: str) -> List[SearchMatch]:
        self.search_term = term
        return self.search_results()

    def search_results(self) -> List[SearchMatch]:
        """Matches for the current term; empty unless the corpus is ready."""
        if not self.snapshot.is_ready:
            return []
        return search(
            self.search_term,
            self.canonical_books,
            min_term_length=self.config.search_min_term_length,
            max_results=self.config.search_max_results,
        )

    def highlight(self, text: str) -> List[HighlightSegment]:
        return highlight(text, self.search_term)
