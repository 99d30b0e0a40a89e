"""
Tests for domain/location.py - Location Model.

Covers:
- Location keys and labels
- Partial edit composition
- Clamping against concrete and degenerate corpora
"""
import pytest

from domain.location import (
    START,
    UNSET,
    Location,
    LocationEdit,
    clamp,
    compose_location_edit,
    format_location,
    is_valid,
    location_key,
)


# =============================================================================
# Keys and Labels
# =============================================================================

class TestLocationKey:
    """Tests for location_key."""

    def test_whole_chapter_key(self):
        assert location_key(Location(0, 0)) == "0-0-all"

    def test_verse_key(self):
        assert location_key(Location(42, 2, 15)) == "42-2-15"

    def test_verse_zero_is_not_all(self):
        assert location_key(Location(1, 1, 0)) == "1-1-0"

    def test_key_property_matches_function(self):
        location = Location(5, 3, 7)
        assert location.key == location_key(location)

    def test_equal_locations_share_keys(self):
        assert Location(3, 1, None).key == Location(3, 1).key


class TestFormatLocation:
    """Tests for format_location."""

    def test_verse_label_is_one_based(self):
        assert format_location(Location(42, 2, 15), "John") == "John 3:16"

    def test_chapter_label(self):
        assert format_location(Location(0, 0), "Genesis") == "Genesis 1"

    def test_missing_name_falls_back(self):
        assert format_location(Location(0, 4, 0)) == "Book 5:1"


# =============================================================================
# Composition
# =============================================================================

class TestComposeLocationEdit:
    """Tests for compose_location_edit."""

    def test_empty_edit_keeps_current(self):
        current = Location(2, 1, 4)
        assert compose_location_edit(current, LocationEdit()) == current

    def test_book_change_resets_chapter_and_verse(self):
        result = compose_location_edit(Location(0, 5, 3), LocationEdit(book_index=3))
        assert result == Location(3, 0, None)

    def test_chapter_change_resets_verse(self):
        result = compose_location_edit(Location(0, 5, 3), LocationEdit(chapter_index=2))
        assert result == Location(0, 2, None)

    def test_explicit_verse_survives_book_change(self):
        result = compose_location_edit(Location(0, 5, 3), LocationEdit(book_index=3, verse_index=7))
        assert result == Location(3, 0, 7)

    def test_verse_only_edit_keeps_book_and_chapter(self):
        result = compose_location_edit(Location(4, 2, None), LocationEdit(verse_index=9))
        assert result == Location(4, 2, 9)

    def test_explicit_none_verse_clears_selection(self):
        result = compose_location_edit(Location(4, 2, 9), LocationEdit(verse_index=None))
        assert result == Location(4, 2, None)

    def test_same_book_counts_as_book_change(self):
        result = compose_location_edit(Location(4, 2, 9), LocationEdit(book_index=4))
        assert result == Location(4, 0, None)

    def test_book_and_chapter_together(self):
        result = compose_location_edit(Location(0, 0, 0), LocationEdit(book_index=10, chapter_index=3))
        assert result == Location(10, 3, None)

    def test_no_clamping_happens(self):
        result = compose_location_edit(START, LocationEdit(book_index=999, chapter_index=-5))
        assert result == Location(999, -5, None)

    def test_edit_to_location_names_every_field(self):
        edit = LocationEdit.to(Location(1, 2, None))
        assert edit.book_index == 1
        assert edit.chapter_index == 2
        assert edit.verse_index is None
        assert edit.verse_index is not UNSET


# =============================================================================
# Clamping
# =============================================================================

class TestClamp:
    """Tests for clamp."""

    def test_valid_location_unchanged(self, canon_books):
        location = Location(42, 2, 3)
        assert clamp(location, canon_books) == location

    def test_book_overflow(self, canon_books):
        assert clamp(Location(500, 0), canon_books).book_index == len(canon_books) - 1

    def test_negative_indices(self, canon_books):
        assert clamp(Location(-3, -1, -7), canon_books) == Location(0, 0, 0)

    def test_chapter_overflow(self, canon_books):
        assert clamp(Location(1, 99), canon_books) == Location(1, 2, None)

    def test_verse_overflow(self, canon_books):
        assert clamp(Location(1, 0, 99), canon_books) == Location(1, 0, 3)

    def test_absent_verse_stays_absent(self, canon_books):
        assert clamp(Location(1, 1, None), canon_books).verse_index is None

    def test_verse_overflow_in_edge_book(self, edge_books):
        assert clamp(Location(0, 0, 10), edge_books) == Location(0, 0, 2)

    def test_book_without_chapters(self, edge_books):
        assert clamp(Location(1, 3, 2), edge_books) == Location(1, 0, None)

    def test_empty_corpus_returns_proposal_verbatim(self):
        proposed = Location(7, -2, 40)
        assert clamp(proposed, []) == proposed

    @pytest.mark.parametrize("location", [
        Location(0, 0),
        Location(65, 2, 3),
        Location(-1, 100, 100),
        Location(30, 1, None),
    ])
    def test_clamped_is_valid(self, canon_books, location):
        assert is_valid(clamp(location, canon_books), canon_books)

    def test_clamp_is_idempotent(self, edge_books):
        once = clamp(Location(3, 3, 3), edge_books)
        assert clamp(once, edge_books) == once


class TestIsValid:
    """Tests for is_valid."""

    def test_out_of_range_book(self, edge_books):
        assert not is_valid(Location(2, 0), edge_books)

    def test_chapterless_book_allows_chapter_zero(self, edge_books):
        assert is_valid(Location(1, 0), edge_books)
        assert not is_valid(Location(1, 0, 0), edge_books)

    def test_verse_must_exist(self, edge_books):
        assert is_valid(Location(0, 0, 2), edge_books)
        assert not is_valid(Location(0, 0, 3), edge_books)
