"""Translation tracking store mapping rendered values to content identifiers.

The store is keyed by the *rendered* text, not the message id, so identical
text produced by several ids collapses into one entry carrying all of them.
Growth is bounded only by explicit :meth:`TrackingStore.evict` calls, which
drop the least recently tracked values first.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Literal

from .host import HostEnvironment, HostGlobals, get_host
from .services import telemetry as telemetry_service

__all__ = [
    "EntryMetadata",
    "TrackingEntry",
    "TrackingStore",
    "initialize_memory_map",
    "get_memory_map",
    "track_translation",
    "cleanup_memory_map",
]

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class EntryMetadata:
    """Last-seen locale and the most recent tracking time of a value."""

    language: str | None = None
    tracked_at: float = 0.0


@dataclass(slots=True)
class TrackingEntry:
    """Content ids known to produce one rendered value."""

    ids: set[str] = field(default_factory=set)
    kind: Literal["text"] = "text"
    metadata: EntryMetadata = field(default_factory=EntryMetadata)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ids": sorted(self.ids),
            "type": self.kind,
            "metadata": {
                "language": self.metadata.language,
                "trackedAt": self.metadata.tracked_at,
            },
        }


class TrackingStore:
    """Value -> :class:`TrackingEntry` index with least-recently-tracked eviction.

    Iteration follows first-track order; re-tracking a value refreshes its
    timestamp without moving it.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, TrackingEntry] = {}
        self._clock = clock

    def track(self, value: str, content_id: str, language: str | None = None) -> TrackingEntry:
        """Record that ``content_id`` rendered ``value``."""

        entry = self._entries.get(value)
        if entry is None:
            entry = TrackingEntry()
            self._entries[value] = entry
        entry.ids.add(content_id)
        entry.metadata = EntryMetadata(language=language, tracked_at=self._clock())
        return entry

    def evict(self, max_size: int) -> int:
        """Drop the oldest-tracked entries until at most ``max_size`` remain.

        Entries sharing a timestamp leave in iteration order. Returns the
        number of entries removed.
        """

        if max_size < 0:
            raise ValueError("max_size must be non-negative")
        overflow = len(self._entries) - max_size
        if overflow <= 0:
            return 0

        ordered = sorted(self._entries.items(), key=lambda item: item[1].metadata.tracked_at)
        for value, _entry in ordered[:overflow]:
            del self._entries[value]
        return overflow

    def get(self, value: str) -> TrackingEntry | None:
        return self._entries.get(value)

    def items(self) -> list[tuple[str, TrackingEntry]]:
        return list(self._entries.items())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, value: object) -> bool:
        return value in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


def _resolve_globals(host: HostEnvironment | None) -> HostGlobals | None:
    target = host if host is not None else get_host()
    if target is None:
        return None
    return target.globals


def initialize_memory_map(host: HostEnvironment | None = None) -> TrackingStore | None:
    """Create the shared store in the host slot if needed and return it."""

    slot = _resolve_globals(host)
    if slot is None:
        return None
    if slot.memory_map is None:
        slot.memory_map = TrackingStore()
        LOGGER.debug("Initialized live editor memory map")
    return slot.memory_map


def get_memory_map(host: HostEnvironment | None = None) -> TrackingStore | None:
    slot = _resolve_globals(host)
    return slot.memory_map if slot is not None else None


def track_translation(
    value: str,
    key: str,
    language: str | None = None,
    *,
    debug: bool = False,
    host: HostEnvironment | None = None,
) -> None:
    """Track ``value`` as produced by message ``key``; silent without a store."""

    slot = _resolve_globals(host)
    if slot is None or slot.memory_map is None:
        return
    slot.memory_map.track(value, key, language)
    if debug or slot.debug:
        LOGGER.info("Tracked translation: value=%r key=%s language=%s", value, key, language)


def cleanup_memory_map(max_size: int, host: HostEnvironment | None = None) -> int:
    """Evict least recently tracked entries beyond ``max_size``."""

    store = get_memory_map(host)
    if store is None:
        return 0
    removed = store.evict(max_size)
    if removed:
        telemetry_service.emit("tracking.evicted", {"removed": removed, "size": len(store), "max_size": max_size})
    return removed
