"""
Tests for domain/navigator.py - Navigator State Machine.

Covers:
- Hover / leave / commit transitions
- Filter changes and book re-selection
- Corpus snapshot updates (ready, pending, failed)
- The cascading menu view model
"""
import pytest

from data import canon
from data.canon import BookCategory
from data.schemas import CorpusSnapshot
from domain.hierarchy import ALL
from domain.history import HistoryTracker
from domain.location import Location, LocationEdit
from domain.navigator import (
    MAX_VERSE_LABEL_LENGTH,
    Navigator,
    NavigatorPath,
    NavigatorState,
    PathEdit,
    make_verse_label,
)
from tests.factories import make_book, make_canon

MATTHEW = 39
JOHN = 42
ACTS = 43


def at(book, chapter=None, verse=None, **filters) -> PathEdit:
    """PathEdit naming only the given location fields."""
    fields = {"book_index": book}
    if chapter is not None:
        fields["chapter_index"] = chapter
    if verse is not None:
        fields["verse_index"] = verse
    return PathEdit(location=LocationEdit(**fields), **filters)


@pytest.fixture
def history():
    return HistoryTracker()


@pytest.fixture
def navigator(canon_books, history):
    return Navigator(canon_books, history=history)


# =============================================================================
# Transitions
# =============================================================================

class TestTransitions:
    """Tests for hover, leave_hover and commit."""

    def test_starts_idle_at_first_book(self, navigator):
        assert navigator.state is NavigatorState.IDLE
        assert navigator.committed_path == NavigatorPath()
        assert navigator.active_path is navigator.committed_path

    def test_hover_sets_preview_only(self, navigator, history):
        preview = navigator.hover(at(JOHN))
        assert navigator.state is NavigatorState.HOVERING
        assert preview.location == Location(JOHN, 0, None)
        assert navigator.committed_path.location == Location(0, 0, None)
        assert len(history) == 0

    def test_leave_hover_restores_committed(self, navigator):
        navigator.hover(at(JOHN))
        path = navigator.leave_hover()
        assert navigator.state is NavigatorState.IDLE
        assert path == navigator.committed_path
        assert navigator.preview_path is None

    def test_leave_hover_when_idle_is_harmless(self, navigator):
        navigator.leave_hover()
        assert navigator.state is NavigatorState.IDLE

    def test_commit_records_history_and_clears_preview(self, navigator, history):
        navigator.hover(at(JOHN))
        path = navigator.commit(at(JOHN, 2, 3))
        assert navigator.state is NavigatorState.IDLE
        assert path.location == Location(JOHN, 2, 3)
        assert history.keys == ("42-2-3",)

    def test_hover_builds_on_preview(self, navigator):
        navigator.hover(at(JOHN))
        preview = navigator.hover(PathEdit(location=LocationEdit(chapter_index=1)))
        assert preview.location == Location(JOHN, 1, None)

    def test_commit_builds_on_preview(self, navigator):
        navigator.hover(at(JOHN, 2))
        path = navigator.commit(PathEdit(location=LocationEdit(verse_index=1)))
        assert path.location == Location(JOHN, 2, 1)

    def test_commit_clamps(self, navigator):
        path = navigator.commit(at(999, 50, 50))
        assert path.location == Location(65, 2, 3)

    def test_commit_without_history(self, canon_books):
        navigator = Navigator(canon_books)
        assert navigator.commit(at(3)).location == Location(3, 0, None)

    def test_preview_location_is_clamped(self, edge_books):
        navigator = Navigator(edge_books)
        preview = navigator.hover(at(1, 4, 2))
        assert preview.location == Location(1, 0, None)


# =============================================================================
# Filters
# =============================================================================

class TestFilters:
    """Tests for testament/category changes."""

    def test_testament_change_keeps_matching_book(self, navigator):
        navigator.commit(at(JOHN))
        path = navigator.commit(PathEdit(testament=canon.Testament.NEW))
        assert path.testament is canon.Testament.NEW
        assert path.location.book_index == JOHN

    def test_testament_change_picks_first_matching_book(self, navigator):
        path = navigator.commit(PathEdit(testament=canon.Testament.NEW))
        assert path.location == Location(MATTHEW, 0, None)

    def test_category_change(self, navigator):
        path = navigator.commit(PathEdit(testament=canon.Testament.NEW, category=BookCategory.HISTORY))
        assert path.category is BookCategory.HISTORY
        assert path.location.book_index == ACTS

    def test_switching_testament_resets_illegal_category(self, navigator):
        navigator.commit(PathEdit(testament=canon.Testament.NEW, category=BookCategory.GOSPELS))
        path = navigator.commit(PathEdit(testament=canon.Testament.OLD))
        assert path.category is ALL
        assert path.location.book_index == 0

    def test_history_category_survives_testament_switch(self, navigator):
        navigator.commit(PathEdit(testament=canon.Testament.OLD, category=BookCategory.HISTORY))
        path = navigator.commit(PathEdit(testament=canon.Testament.NEW))
        assert path.category is BookCategory.HISTORY
        assert path.location.book_index == ACTS

    def test_hovering_filter_previews_book(self, navigator):
        preview = navigator.hover(PathEdit(testament=canon.Testament.NEW, category=BookCategory.GOSPELS))
        assert preview.location.book_index == MATTHEW
        assert navigator.committed_path.testament is ALL

    def test_explicit_book_outside_filters_widens_them(self, navigator):
        navigator.commit(PathEdit(testament=canon.Testament.NEW, category=BookCategory.GOSPELS))
        path = navigator.commit(at(0, 0, 0))
        assert path.testament is ALL
        assert path.category is ALL
        assert path.location == Location(0, 0, 0)

    def test_explicit_book_inside_filters_keeps_them(self, navigator):
        navigator.commit(PathEdit(testament=canon.Testament.NEW, category=BookCategory.GOSPELS))
        path = navigator.commit(at(JOHN, 1))
        assert path.category is BookCategory.GOSPELS
        assert path.location == Location(JOHN, 1, None)

    def test_visible_books_follow_filters(self, navigator):
        navigator.hover(PathEdit(testament=canon.Testament.NEW, category=BookCategory.GOSPELS))
        assert navigator.visible_book_indices() == [39, 40, 41, 42]
        assert navigator.visible_book_indices(navigator.committed_path) == list(range(66))

    def test_filters_only_pick_loaded_books(self, history):
        navigator = Navigator(make_canon()[:MATTHEW + 2], history=history)
        path = navigator.commit(PathEdit(testament=canon.Testament.NEW, category=BookCategory.GOSPELS))
        assert path.location.book_index == MATTHEW
        assert navigator.visible_book_indices() == [MATTHEW, MATTHEW + 1]

    def test_filter_without_loaded_books_keeps_committed_book(self, history, edge_books):
        navigator = Navigator(edge_books, history=history)
        navigator.commit(at(1))
        path = navigator.commit(PathEdit(testament=canon.Testament.NEW))
        assert path.testament is canon.Testament.NEW
        assert path.location.book_index == 1
        assert navigator.visible_book_indices() == []

    def test_category_options(self, navigator):
        assert BookCategory.GOSPELS not in navigator.category_options(canon.Testament.OLD)
        assert BookCategory.HISTORY in navigator.category_options(canon.Testament.NEW)
        assert len(navigator.category_options(ALL)) == len(BookCategory)


# =============================================================================
# Corpus updates
# =============================================================================

class TestCorpusUpdates:
    """Tests for Navigator.update_corpus."""

    def test_ready_snapshot_reclamps(self, navigator, edge_books):
        navigator.commit(at(JOHN, 2, 3))
        navigator.update_corpus(CorpusSnapshot.ready({"kjv": edge_books}), "kjv")
        assert navigator.committed_path.location == Location(1, 0, None)

    def test_ready_snapshot_reclamps_preview(self, navigator, edge_books):
        navigator.hover(at(JOHN, 2))
        navigator.update_corpus(CorpusSnapshot.ready({"kjv": edge_books}), "kjv")
        assert navigator.preview_path.location == Location(1, 0, None)

    def test_pending_snapshot_freezes_navigation(self, navigator, history):
        navigator.commit(at(JOHN))
        navigator.update_corpus(CorpusSnapshot.pending(), "kjv")

        assert not navigator.corpus_available
        assert navigator.commit(at(3)).location.book_index == JOHN
        assert navigator.hover(at(3)) == navigator.committed_path
        assert len(history) == 1

    def test_failed_snapshot_freezes_navigation(self, navigator):
        navigator.commit(at(JOHN))
        navigator.update_corpus(CorpusSnapshot.failed("Unable to load KJV"), "kjv")
        assert navigator.commit(at(3)).location.book_index == JOHN
        assert navigator.menu().is_empty

    def test_unavailable_from_start(self, history):
        navigator = Navigator(books=None, history=history)
        navigator.commit(at(5))
        assert navigator.committed_path.location == Location(0, 0, None)
        assert len(history) == 0

    def test_recovers_after_ready(self, canon_books):
        navigator = Navigator(books=None)
        navigator.update_corpus(CorpusSnapshot.ready({"kjv": canon_books}), "kjv")
        assert navigator.commit(at(JOHN)).location.book_index == JOHN

    def test_ready_but_empty_corpus_keeps_locations(self):
        navigator = Navigator(books=[])
        path = navigator.commit(at(12, 4, 2))
        assert path.location == Location(12, 4, 2)


# =============================================================================
# Menu
# =============================================================================

class TestMenu:
    """Tests for the cascading menu view model."""

    def test_menu_follows_active_path(self, navigator):
        navigator.hover(at(JOHN, 1))
        menu = navigator.menu()
        assert menu.active_book_name == "John"
        assert [c.index for c in menu.chapters if c.active] == [1]
        assert len(menu.verses) == 4

    def test_menu_marks_active_verse(self, navigator):
        navigator.commit(at(JOHN, 1, 2))
        menu = navigator.menu()
        assert [v.index for v in menu.verses if v.active] == [2]
        assert [b.index for b in menu.books if b.active] == [JOHN]

    def test_menu_books_filtered(self, navigator):
        navigator.commit(PathEdit(testament=canon.Testament.NEW, category=BookCategory.GOSPELS))
        names = [book.name for book in navigator.menu().books]
        assert names == ["Matthew", "Mark", "Luke", "John"]

    def test_verse_column_is_capped(self):
        books = make_canon(chapters=1, verses=75)
        menu = Navigator(books, menu_verse_limit=60).menu()
        assert len(menu.verses) == 60
        assert menu.verses_truncated

    def test_verse_column_not_truncated(self, navigator):
        assert not navigator.menu().verses_truncated

    def test_chapterless_book_has_empty_columns(self, edge_books):
        navigator = Navigator(edge_books)
        navigator.commit(at(1))
        menu = navigator.menu()
        assert menu.chapters == ()
        assert menu.verses == ()

    def test_long_verse_labels_shortened(self):
        long_text = "x" * 200
        books = [make_book("a", "Alpha", [[long_text]])]
        label = Navigator(books).menu().verses[0].label
        assert label == "x" * MAX_VERSE_LABEL_LENGTH + "…"


class TestMakeVerseLabel:
    """Tests for make_verse_label."""

    def test_short_text_unchanged(self):
        assert make_verse_label("Jesus wept.") == "Jesus wept."

    def test_exact_length_unchanged(self):
        assert make_verse_label("a" * 90) == "a" * 90

    def test_custom_limit(self):
        assert make_verse_label("abcdef", limit=3) == "abc…"
