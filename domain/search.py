"""
LECTIO - Search Engine

Linear, case-insensitive substring search over the canonical corpus, and
match highlighting for rendering results.

Terms shorter than two characters (after trimming) return nothing. The scan
walks books, chapters and verses in canonical order and stops at the result
cap, so the result is always a prefix of the full match list.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from core.types import HighlightSegmentDict
from data.schemas import Corpus
from domain.location import Location
from observability import get_logger, get_tracer

logger = get_logger(__name__)
tracer = get_tracer(__name__)

MIN_TERM_LENGTH = 2
MAX_RESULTS = 50


@dataclass(frozen=True)
class SearchMatch:
    """A verse containing the search term. location.verse_index is always set."""
    location: Location
    text: str


@dataclass(frozen=True)
class HighlightSegment:
    text: str
    is_match: bool

    def to_dict(self) -> HighlightSegmentDict:
        return {"text": self.text, "is_match": self.is_match}


def search(
    term: str,
    corpus: Corpus,
    min_term_length: int = MIN_TERM_LENGTH,
    max_results: int = MAX_RESULTS,
) -> List[SearchMatch]:
    """
    Find verses containing a term.

    Args:
        term: Raw user input; surrounding whitespace is ignored
        corpus: Canonical translation books
        min_term_length: Shorter trimmed terms yield no results
        max_results: Scan stops after this many matches

    Returns:
        Matches in (book, chapter, verse) order
    """
    trimmed = term.strip()
    if len(trimmed) < min_term_length or not corpus:
        return []

    query = trimmed.lower()
    matches: List[SearchMatch] = []

    with tracer.start_as_current_span("search.scan") as span:
        span.set_attribute("search.term_length", len(trimmed))
        for book_index, book in enumerate(corpus):
            for chapter_index, chapter in enumerate(book.chapters):
                for verse_index, verse in enumerate(chapter):
                    if query not in verse.lower():
                        continue
                    matches.append(SearchMatch(
                        location=Location(book_index, chapter_index, verse_index),
                        text=verse,
                    ))
                    if len(matches) >= max_results:
                        logger.debug("Search capped", term=trimmed, matches=len(matches))
                        span.set_attribute("search.capped", True)
                        return matches
        span.set_attribute("search.matches", len(matches))

    logger.debug("Search finished", term=trimmed, matches=len(matches))
    return matches


def highlight(text: str, term: str) -> List[HighlightSegment]:
    """
    Split text around case-insensitive occurrences of the trimmed term.

    Both matched and unmatched segments keep their original casing. Segments
    are never empty, so empty text yields no segments whatever the term.

    Example:
        >>> [(s.text, s.is_match) for s in highlight("In the beginning", "THE")]
        [('In ', False), ('the', True), (' beginning', False)]
    """
    if not text:
        return []
    trimmed = term.strip()
    if not trimmed:
        return [HighlightSegment(text, False)]

    pattern = re.compile(f"({re.escape(trimmed)})", re.IGNORECASE)
    # re.split with one capturing group alternates plain, match, plain, ...
    parts = pattern.split(text)
    return [
        HighlightSegment(part, index % 2 == 1)
        for index, part in enumerate(parts)
        if part
    ]
