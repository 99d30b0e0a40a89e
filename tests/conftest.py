"""
LECTIO - Test Configuration

Pytest fixtures and configuration for all tests.
"""
from typing import Dict, List

import pytest

from config import ReaderConfig
from data.schemas import BookDescriptor, CorpusSnapshot
from tests.factories import GENESIS_1_1, make_book, make_canon


@pytest.fixture
def sample_verse_text() -> str:
    """Sample verse text for testing."""
    return GENESIS_1_1


@pytest.fixture
def canon_books() -> List[BookDescriptor]:
    """Canonical translation: 66 books, 3 chapters of 4 verses each."""
    return make_canon()


@pytest.fixture
def edge_books() -> List[BookDescriptor]:
    """Two books: one chapter of three verses, then a book without chapters."""
    return [
        make_book("a", "Alpha", [["a1", "a2", "a3"]]),
        make_book("b", "Beta", []),
    ]


@pytest.fixture
def secondary_books() -> List[BookDescriptor]:
    """A second translation with a shorter first chapter of Genesis."""
    books = make_canon(suffix=" (BBE)")
    genesis = books[0]
    books[0] = BookDescriptor(
        genesis.short_id,
        genesis.display_name,
        (("At the first God made the heaven and the earth.",),) + genesis.chapters[1:],
    )
    return books


@pytest.fixture
def books_by_translation(canon_books, secondary_books) -> Dict[str, List[BookDescriptor]]:
    return {"kjv": canon_books, "bbe": secondary_books}


@pytest.fixture
def ready_snapshot(books_by_translation) -> CorpusSnapshot:
    """Ready snapshot holding kjv and bbe."""
    return CorpusSnapshot.ready(books_by_translation)


@pytest.fixture
def reader_config() -> ReaderConfig:
    """Reader limits independent of the environment."""
    return ReaderConfig(
        history_limit=10,
        max_translations=3,
        search_min_term_length=2,
        search_max_results=50,
        menu_verse_limit=60,
        menu_label_length=90,
    )
