"""
Property-Based Tests for Search and Highlighting
"""
import string

from hypothesis import given, settings, strategies as st

from domain.search import highlight, search
from tests.property.strategies import corpus_strategy

ascii_text = st.text(alphabet=string.ascii_letters + " .,", max_size=60)
ascii_term = st.text(alphabet=string.ascii_letters + " ", min_size=0, max_size=6)


class TestSearchInvariants:
    """Property-based tests for search."""

    @given(st.text(max_size=8), corpus_strategy(), st.integers(min_value=1, max_value=10))
    @settings(max_examples=200)
    def test_results_bounded_and_matching(self, term, corpus, cap):
        results = search(term, corpus, max_results=cap)
        assert len(results) <= cap
        query = term.strip().lower()
        for match in results:
            assert query in match.text.lower()
            location = match.location
            assert corpus[location.book_index].chapters[location.chapter_index][location.verse_index] == match.text

    @given(st.text(max_size=8), corpus_strategy(), st.integers(min_value=1, max_value=10))
    @settings(max_examples=200)
    def test_capped_results_are_a_prefix(self, term, corpus, cap):
        assert search(term, corpus, max_results=cap) == search(term, corpus, max_results=1000)[:cap]

    @given(st.text(max_size=1), corpus_strategy())
    def test_short_terms_find_nothing(self, term, corpus):
        assert search(term, corpus) == []


class TestHighlightInvariants:
    """Property-based tests for highlight."""

    @given(ascii_text, ascii_term)
    @settings(max_examples=300)
    def test_segments_reassemble_text(self, text, term):
        assert "".join(s.text for s in highlight(text, term)) == text

    @given(ascii_text, ascii_term)
    @settings(max_examples=300)
    def test_matches_equal_term_ignoring_case(self, text, term):
        trimmed = term.strip().lower()
        for segment in highlight(text, term):
            if segment.is_match:
                assert segment.text.lower() == trimmed

    @given(ascii_text, ascii_term)
    def test_no_empty_segments(self, text, term):
        assert all(segment.text for segment in highlight(text, term))
