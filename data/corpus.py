"""
LECTIO - Corpus Loader

The collaborator that turns translation sources into CorpusSnapshots.

For each translation, concurrently:
1. read the on-disk cache entry (an unreadable entry is deleted)
2. else read a local source file from the data directory, if present
3. else fetch the source URL with httpx and cache the result

Any translation failing makes the whole snapshot FAILED; the books of the
previous snapshot are carried along so the view can keep showing them.
An unexpected error also publishes a FAILED snapshot before it propagates.
There is no retry here: the view triggers reload() explicitly.

Usage:
    loader = CorpusLoader(cache_dir=Path("./cache"))
    loader.subscribe(session.update_corpus)
    await loader.load()
"""
from __future__ import annotations

import asyncio
import json
from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import httpx
from pydantic import ValidationError

from core.errors import CorpusLoadError, ErrorContext
from data.schemas import (
    BookDescriptor,
    CorpusSnapshot,
    CorpusStatus,
    parse_books,
    strip_bom,
)
from data.translations import TRANSLATION_DEFINITIONS, TranslationDefinition
from observability import LogContext, get_logger, get_tracer

logger = get_logger(__name__)
tracer = get_tracer(__name__)

CACHE_VERSION = "v1"

SnapshotListener = Callable[[CorpusSnapshot], None]


def cache_key(translation_id: str) -> str:
    return f"bible-data-{translation_id}-{CACHE_VERSION}"


def decode_books(text: str, source: str, translation_id: Optional[str] = None) -> List[BookDescriptor]:
    """
    Decode a translation source document.

    Raises:
        CorpusLoadError: If the text is not valid JSON of the expected shape
    """
    try:
        return parse_books(json.loads(strip_bom(text)))
    except (json.JSONDecodeError, ValidationError) as e:
        raise CorpusLoadError(
            f"Malformed translation data in {source}",
            translation_id=translation_id,
            source=source,
            cause=e,
            context=ErrorContext.capture("decode", "corpus", translation_id=translation_id),
        ) from e


def load_books_file(path: Path, translation_id: Optional[str] = None) -> List[BookDescriptor]:
    """Read books from a local JSON source file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusLoadError(
            f"Unable to read {path}",
            translation_id=translation_id,
            source=str(path),
            cause=e,
        ) from e
    return decode_books(text, str(path), translation_id)


# =============================================================================
# DISK CACHE
# =============================================================================

class TranslationCache:
    """One JSON file per translation under cache_dir."""

    def __init__(self, cache_dir: Path):
        self.cache_dir = Path(cache_dir)

    def path(self, translation_id: str) -> Path:
        return self.cache_dir / f"{cache_key(translation_id)}.json"

    def read(self, translation_id: str) -> Optional[List[BookDescriptor]]:
        path = self.path(translation_id)
        if not path.exists():
            return None
        try:
            return load_books_file(path, translation_id)
        except CorpusLoadError as e:
            logger.warning("Invalid cached translation data, clearing entry", path=str(path), error=e.message)
            path.unlink(missing_ok=True)
            return None

    def write(self, translation_id: str, books: Sequence[BookDescriptor]) -> None:
        path = self.path(translation_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps([book.to_dict() for book in books], ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning("Unable to cache translation data", path=str(path), error=str(e))


# =============================================================================
# LOADER
# =============================================================================

class CorpusLoader:
    """
    Loads every translation and publishes snapshots to listeners.

    Args:
        definitions: Translations to load
        cache_dir: Directory for cached sources; caching is off when None
        data_dir: Directory with local "<translation_id>.json" sources
        client: httpx client to use; one is created per load when None
        timeout: HTTP timeout in seconds for the created client
    """

    def __init__(
        self,
        definitions: Sequence[TranslationDefinition] = TRANSLATION_DEFINITIONS,
        cache_dir: Optional[Path] = None,
        data_dir: Optional[Path] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.definitions = tuple(definitions)
        self.cache = TranslationCache(cache_dir) if cache_dir is not None else None
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self.timeout = timeout
        self._client = client
        self._snapshot = CorpusSnapshot.pending()
        self._listeners: List[SnapshotListener] = []
        self._generation = 0

    @property
    def snapshot(self) -> CorpusSnapshot:
        return self._snapshot

    def get_books(self, translation_id: str) -> Union[Tuple[BookDescriptor, ...], CorpusStatus]:
        return self._snapshot.get_books(translation_id)

    def subscribe(self, listener: SnapshotListener) -> None:
        """Call listener with every new snapshot."""
        self._listeners.append(listener)

    async def reload(self) -> CorpusSnapshot:
        return await self.load()

    async def load(self) -> CorpusSnapshot:
        """
        Load all translations and publish the resulting snapshot.

        A load superseded by a later load() call does not publish its result.
        """
        self._generation += 1
        generation = self._generation
        previous = self._snapshot
        self._publish(replace(previous, status=CorpusStatus.PENDING, error=None))

        with tracer.start_as_current_span("corpus.load") as span:
            span.set_attribute("corpus.translations", len(self.definitions))
            if self._client is not None:
                results = await self._load_all(self._client)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    results = await self._load_all(client)

        if generation != self._generation:
            logger.debug("Stale corpus load discarded", generation=generation)
            return self._snapshot

        books_by_translation: Dict[str, List[BookDescriptor]] = {}
        for definition, result in zip(self.definitions, results):
            if isinstance(result, CorpusLoadError):
                logger.warning("Translation load failed", translation_id=definition.id, error=result.message)
                snapshot = CorpusSnapshot.failed(result.message, previous=previous)
                self._publish(snapshot)
                return snapshot
            if isinstance(result, BaseException):
                logger.error(
                    "Unexpected error loading translation",
                    translation_id=definition.id,
                    error=repr(result),
                )
                self._publish(CorpusSnapshot.failed(
                    f"Unable to load {definition.short_name}", previous=previous,
                ))
                raise result
            books_by_translation[definition.id] = result

        snapshot = CorpusSnapshot.ready(books_by_translation)
        logger.info("Corpus ready", translations=list(books_by_translation))
        self._publish(snapshot)
        return snapshot

    async def _load_all(self, client: httpx.AsyncClient) -> list:
        return await asyncio.gather(
            *(self._load_translation(definition, client) for definition in self.definitions),
            return_exceptions=True,
        )

    async def _load_translation(
        self,
        definition: TranslationDefinition,
        client: httpx.AsyncClient,
    ) -> List[BookDescriptor]:
        async with LogContext(translation_id=definition.id):
            # File reads and writes run in worker threads so translations load concurrently
            if self.cache is not None:
                cached = await asyncio.to_thread(self.cache.read, definition.id)
                if cached is not None:
                    return cached

            if self.data_dir is not None:
                local = self.data_dir / f"{definition.id}.json"
                if local.exists():
                    return await asyncio.to_thread(load_books_file, local, definition.id)

            logger.info("Fetching translation", url=definition.source_url)
            books = await self._fetch(definition, client)
            if self.cache is not None:
                await asyncio.to_thread(self.cache.write, definition.id, books)
            return books

    async def _fetch(self, definition: TranslationDefinition, client: httpx.AsyncClient) -> List[BookDescriptor]:
        try:
            response = await client.get(definition.source_url)
        except httpx.HTTPError as e:
            raise CorpusLoadError(
                f"Unable to load {definition.short_name}",
                translation_id=definition.id,
                source=definition.source_url,
                cause=e,
            ) from e

        if not response.is_success:
            raise CorpusLoadError(
                f"Unable to load {definition.short_name}",
                translation_id=definition.id,
                source=definition.source_url,
            )
        return decode_books(response.text, definition.source_url, definition.id)

    def _publish(self, snapshot: CorpusSnapshot) -> None:
        self._snapshot = snapshot
        for listener in self._listeners:
            listener(snapshot)
