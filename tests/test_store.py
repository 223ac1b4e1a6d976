"""Tests for :mod:`livetrack.store`."""

from __future__ import annotations

import time

import pytest

from livetrack.host import FrameHost
from livetrack.store import (
    TrackingStore,
    cleanup_memory_map,
    get_memory_map,
    initialize_memory_map,
    track_translation,
)


class TestTrackingStore:
    def test_track_creates_entry(self, clock) -> None:
        store = TrackingStore(clock=clock)
        entry = store.track("Hello", "greeting", "en")

        assert len(store) == 1
        assert entry.ids == {"greeting"}
        assert entry.kind == "text"
        assert entry.metadata.language == "en"
        assert entry.metadata.tracked_at == 1.0

    def test_track_same_pair_is_idempotent(self, clock) -> None:
        store = TrackingStore(clock=clock)
        store.track("Hello", "greeting")
        store.track("Hello", "greeting")

        assert store.get("Hello").ids == {"greeting"}
        assert len(store) == 1

    def test_track_accumulates_ids_for_same_value(self, clock) -> None:
        store = TrackingStore(clock=clock)
        store.track("Save", "toolbar.save", "en")
        store.track("Save", "dialog.save", "de")

        entry = store.get("Save")
        assert entry.ids == {"toolbar.save", "dialog.save"}
        assert entry.metadata.language == "de"
        assert entry.metadata.tracked_at == 2.0

    def test_track_overwrites_language_with_none(self, clock) -> None:
        store = TrackingStore(clock=clock)
        store.track("Save", "a", "en")
        store.track("Save", "a")

        assert store.get("Save").metadata.language is None

    def test_retrack_keeps_iteration_position(self, clock) -> None:
        store = TrackingStore(clock=clock)
        store.track("one", "1")
        store.track("two", "2")
        store.track("one", "1b")

        assert list(store) == ["one", "two"]

    def test_default_clock_is_monotonic(self) -> None:
        store = TrackingStore()
        before = time.monotonic()
        first = store.track("v1", "a").metadata.tracked_at
        second = store.track("v2", "b").metadata.tracked_at
        after = time.monotonic()

        assert before <= first <= second <= after

    def test_evict_noop_when_within_capacity(self, clock) -> None:
        store = TrackingStore(clock=clock)
        store.track("v1", "a")
        store.track("v2", "b")

        assert store.evict(2) == 0
        assert store.evict(5) == 0
        assert len(store) == 2

    def test_evict_removes_oldest_tracked(self, clock) -> None:
        store = TrackingStore(clock=clock)
        store.track("v1", "a")
        store.track("v2", "b")
        store.track("v3", "c")

        assert store.evict(2) == 1
        assert "v1" not in store
        assert "v2" in store and "v3" in store

    def test_evict_uses_last_tracked_time_not_insertion(self, clock) -> None:
        store = TrackingStore(clock=clock)
        store.track("v1", "a")
        store.track("v2", "b")
        store.track("v3", "c")
        store.track("v1", "a")

        store.evict(2)

        assert list(store) == ["v1", "v3"]

    def test_evict_ties_follow_iteration_order(self, clock) -> None:
        clock.pinned = True
        store = TrackingStore(clock=clock)
        for value in ("first", "second", "third", "fourth"):
            store.track(value, value)

        assert store.evict(1) == 3
        assert list(store) == ["fourth"]

    def test_evict_to_zero_empties_store(self, clock) -> None:
        store = TrackingStore(clock=clock)
        store.track("v1", "a")

        store.evict(0)

        assert len(store) == 0

    def test_evict_rejects_negative_size(self) -> None:
        with pytest.raises(ValueError):
            TrackingStore().evict(-1)

    def test_entry_to_dict(self, clock) -> None:
        store = TrackingStore(clock=clock)
        store.track("Hi", "b", "en")
        entry = store.track("Hi", "a", "en")

        assert entry.to_dict() == {
            "ids": ["a", "b"],
            "type": "text",
            "metadata": {"language": "en", "trackedAt": 2.0},
        }


class TestHostSlotOperations:
    def test_operations_without_host_are_noops(self) -> None:
        assert initialize_memory_map() is None
        assert get_memory_map() is None
        track_translation("Hello", "greeting")
        assert cleanup_memory_map(0) == 0

    def test_initialize_is_idempotent(self, embedded_host: FrameHost) -> None:
        first = initialize_memory_map()
        second = initialize_memory_map()

        assert first is not None
        assert first is second
        assert embedded_host.globals.memory_map is first

    def test_track_before_initialize_is_silent(self, embedded_host: FrameHost) -> None:
        track_translation("Hello", "greeting")

        assert get_memory_map() is None

    def test_track_and_cleanup_through_slot(self, embedded_host: FrameHost, event_sink) -> None:
        store = initialize_memory_map()
        track_translation("one", "k1", "en")
        track_translation("two", "k2", "en")
        track_translation("three", "k3", "en")

        removed = cleanup_memory_map(2)

        assert removed == 1
        assert len(store) == 2
        assert "one" not in store
        events = event_sink.tail()
        assert events[-1]["event"] == "tracking.evicted"
        assert events[-1]["removed"] == 1

    def test_explicit_host_is_isolated_from_active_host(self, embedded_host: FrameHost, live_url: str) -> None:
        other = FrameHost(location=live_url, top_frame_id="editor")
        initialize_memory_map(other)
        track_translation("Hello", "greeting", host=other)

        assert get_memory_map() is None
        assert "Hello" in get_memory_map(other)

    def test_debug_flag_logs_tracking(self, embedded_host: FrameHost, caplog) -> None:
        initialize_memory_map()
        embedded_host.globals.debug = True

        with caplog.at_level("INFO", logger="livetrack.store"):
            track_translation("Hello", "greeting", "en")

        assert "Tracked translation" in caplog.text
