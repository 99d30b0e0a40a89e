"""
LECTIO - Data Module

Reference data and corpus plumbing.

Architecture:
- canon.py: the 66-book metadata table and its testament/category indices
- translations.py: the parallel translations and their sources
- schemas.py: book descriptors, raw record validation, corpus snapshots
- corpus.py: the loader that fetches, caches and publishes snapshots
"""
from data.canon import (
    BOOK_METADATA,
    CATEGORIES_BY_TESTAMENT,
    TESTAMENT_LABELS,
    TESTAMENT_ORDER,
    BookCategory,
    BookMetadata,
    Testament,
    book_name,
    category_is_legal,
)
from data.corpus import CorpusLoader, TranslationCache, load_books_file
from data.schemas import (
    BookDescriptor,
    BookRecord,
    Corpus,
    CorpusSnapshot,
    CorpusStatus,
    parse_books,
)
from data.translations import (
    CANONICAL_TRANSLATION_ID,
    TRANSLATION_DEFINITIONS,
    TranslationDefinition,
    get_translation,
)

__all__ = [
    # Canon
    "BOOK_METADATA",
    "CATEGORIES_BY_TESTAMENT",
    "TESTAMENT_LABELS",
    "TESTAMENT_ORDER",
    "BookCategory",
    "BookMetadata",
    "Testament",
    "book_name",
    "category_is_legal",
    # Translations
    "CANONICAL_TRANSLATION_ID",
    "TRANSLATION_DEFINITIONS",
    "TranslationDefinition",
    "get_translation",
    # Schemas
    "BookDescriptor",
    "BookRecord",
    "Corpus",
    "CorpusSnapshot",
    "CorpusStatus",
    "parse_books",
    # Loading
    "CorpusLoader",
    "TranslationCache",
    "load_books_file",
]
