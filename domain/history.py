"""
LECTIO - History Tracker

Bounded, most-recent-first list of committed locations with a multi-select.

Rules:
- Entries are deduplicated by location key; re-recording a location moves it
  to the front with a fresh timestamp.
- At most `limit` entries are kept; the oldest fall off the end.
- Recording a location makes it the sole selected entry.
- The selection is always a subset of the present entries and is ordered by
  history order, never by click order.

History is advisory UI state. Every operation on an unknown key is a no-op.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from core.types import LocationKey
from domain.location import Location, location_key
from observability import get_logger

logger = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 10


@dataclass(frozen=True)
class HistoryEntry:
    """A previously committed location."""
    key: LocationKey
    location: Location
    timestamp: datetime


@dataclass(frozen=True)
class HistoryItem:
    """An entry as rendered, with its selection flag."""
    entry: HistoryEntry
    selected: bool

    @property
    def key(self) -> LocationKey:
        return self.entry.key


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HistoryTracker:
    """
    Recently viewed locations.

    Example:
        >>> history = HistoryTracker()
        >>> entry = history.record(Location(0, 0, 0))
        >>> [item.key for item in history.entries()]
        ['0-0-0']
    """

    def __init__(
        self,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.limit = max(1, limit)
        self._clock = clock or _utcnow
        self._entries: List[HistoryEntry] = []
        self._selected: List[LocationKey] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return any(entry.key == key for entry in self._entries)

    @property
    def keys(self) -> Tuple[LocationKey, ...]:
        return tuple(entry.key for entry in self._entries)

    @property
    def selected_keys(self) -> Tuple[LocationKey, ...]:
        return tuple(self._selected)

    def entries(self) -> List[HistoryItem]:
        """All entries, most recent first, with their selection flags."""
        selected = set(self._selected)
        return [HistoryItem(entry, entry.key in selected) for entry in self._entries]

    def selected_entries(self) -> List[HistoryEntry]:
        """Selected entries in history order."""
        by_key = {entry.key: entry for entry in self._entries}
        return [by_key[key] for key in self._selected]

    def get(self, key: LocationKey) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.key == key:
                return entry
        return None

    def record(self, location: Location) -> HistoryEntry:
        """
        Put a location at the front of the history and select only it.

        Returns:
            The new entry
        """
        key = location_key(location)
        entry = HistoryEntry(key=key, location=location, timestamp=self._clock())

        remaining = [existing for existing in self._entries if existing.key != key]
        self._entries = [entry] + remaining

        if len(self._entries) > self.limit:
            evicted = self._entries[self.limit:]
            self._entries = self._entries[:self.limit]
            logger.debug("History entries evicted", keys=[e.key for e in evicted])

        self._selected = [key]
        return entry

    def toggle_select(self, key: LocationKey) -> None:
        """Add or remove an entry from the selection."""
        if key in self._selected:
            self._selected = [selected for selected in self._selected if selected != key]
            return
        if key not in self:
            return
        self._selected.append(key)
        self._sync_selection()

    def reorder(self, from_key: LocationKey, to_key: LocationKey) -> None:
        """Move the from_key entry to the position currently held by to_key."""
        keys = self.keys
        if from_key == to_key or from_key not in keys or to_key not in keys:
            return
        from_index = keys.index(from_key)
        to_index = keys.index(to_key)

        moved = self._entries.pop(from_index)
        self._entries.insert(to_index, moved)
        self._sync_selection()

    def remove(self, key: LocationKey) -> None:
        """Delete an entry and drop it from the selection."""
        self._entries = [entry for entry in self._entries if entry.key != key]
        self._sync_selection()

    def clear(self) -> None:
        self._entries = []
        self._selected = []

    def _sync_selection(self) -> None:
        order = {entry.key: index for index, entry in enumerate(self._entries)}
        kept = {key for key in self._selected if key in order}
        self._selected = sorted(kept, key=order.__getitem__)
