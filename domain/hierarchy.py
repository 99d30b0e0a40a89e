"""
LECTIO - Hierarchy Filter

Testament and category filters over the canonical book list.

The filter pair is (testament | ALL, category | ALL). A category filter is
only meaningful if it is legal for the testament filter; an illegal pair is
repaired by resetting the category to ALL. A filter combination matching no
books is a legal state: callers show "no books", nothing raises.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Sequence, Tuple, Union

from data.canon import BOOK_METADATA, BookCategory, BookMetadata, Testament, category_is_legal
from observability import get_logger

logger = get_logger(__name__)


class FilterAll(Enum):
    """The "no filter" choice for either filter level."""
    ALL = "all"


ALL = FilterAll.ALL

TestamentFilter = Union[Testament, FilterAll]
CategoryFilter = Union[BookCategory, FilterAll]


def sanitize_category(testament: TestamentFilter, category: CategoryFilter) -> CategoryFilter:
    """Reset the category to ALL if it cannot occur in the testament."""
    if category is ALL or testament is ALL:
        return category
    if category_is_legal(testament, category):
        return category
    return ALL


def books_matching(
    testament: TestamentFilter,
    category: CategoryFilter,
    metadata: Sequence[BookMetadata] = BOOK_METADATA,
) -> List[int]:
    """
    Indices of books passing both filters, in canonical order.

    Args:
        testament: Testament filter or ALL
        category: Category filter or ALL
        metadata: Book metadata table, in corpus order

    Returns:
        Matching indices into metadata (possibly empty)
    """
    return [
        index
        for index, meta in enumerate(metadata)
        if (testament is ALL or meta.testament == testament)
        and (category is ALL or meta.category == category)
    ]


def resolve_filter_change(
    new_testament: TestamentFilter,
    new_category: CategoryFilter,
    prior_book_index: int,
    fallback_book_index: int,
    metadata: Sequence[BookMetadata] = BOOK_METADATA,
) -> Tuple[CategoryFilter, int]:
    """
    Pick the category and book after a filter change.

    The prior book is kept if the new filters still include it, otherwise the
    first matching book is chosen. If nothing matches, the fallback (normally
    the last committed book) is returned so the selection never dangles.

    Returns:
        (resolved_category, resolved_book_index)
    """
    resolved_category = sanitize_category(new_testament, new_category)
    if resolved_category is not new_category:
        logger.debug(
            "Category reset for testament",
            testament=new_testament.value,
            category=new_category.value,
        )

    matching = books_matching(new_testament, resolved_category, metadata)
    if prior_book_index in matching:
        return resolved_category, prior_book_index
    if matching:
        return resolved_category, matching[0]

    logger.debug(
        "No books match filters, using fallback",
        testament=new_testament.value,
        category=resolved_category.value,
        fallback=fallback_book_index,
    )
    return resolved_category, fallback_book_index
