"""In-process structured events for the tracking layer.

Event names are dotted (``live_editor.loaded``, ``tracking.evicted``).
Listeners subscribe to an exact name, to a namespace with a trailing ``.*``
(``live_editor.*``), or to everything with ``*``.
"""

from __future__ import annotations

import logging
from collections import deque
from threading import Lock
from typing import Any, Callable, Mapping

LOGGER = logging.getLogger(__name__)

Listener = Callable[[dict[str, Any]], None]

WILDCARD = "*"


class TelemetryHub:
    """Listener registry keyed by event name or namespace pattern."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def subscribe(self, pattern: str, listener: Listener) -> None:
        if not pattern or listener is None:
            return
        bucket = self._listeners.setdefault(pattern, [])
        if listener not in bucket:
            bucket.append(listener)

    def unsubscribe(self, pattern: str, listener: Listener) -> None:
        bucket = self._listeners.get(pattern)
        if bucket and listener in bucket:
            bucket.remove(listener)
        if not bucket:
            self._listeners.pop(pattern, None)

    def listeners_for(self, event_name: str) -> list[Listener]:
        namespace = event_name.split(".", 1)[0]
        matched: list[Listener] = []
        for pattern in (event_name, f"{namespace}.*", WILDCARD):
            for listener in self._listeners.get(pattern, ()):
                if listener not in matched:
                    matched.append(listener)
        return matched

    def publish(self, event_name: str, payload: Mapping[str, Any] | None = None) -> int:
        """Deliver the event and return how many listeners accepted it."""

        if not event_name:
            return 0
        body: dict[str, Any] = dict(payload or {})
        body["event"] = event_name
        delivered = 0
        for listener in self.listeners_for(event_name):
            try:
                listener(dict(body))
            except Exception:  # pragma: no cover - listeners must not break emitters
                LOGGER.debug("Telemetry listener %r rejected %s", listener, event_name, exc_info=True)
                continue
            delivered += 1
        LOGGER.debug("Telemetry %s delivered to %s listener(s)", event_name, delivered)
        return delivered


class InMemoryEventSink:
    """Ring buffer listener for local inspection and tests."""

    def __init__(self, capacity: int = 200) -> None:
        self._capacity = max(10, capacity)
        self._buffer: deque[dict[str, Any]] = deque(maxlen=self._capacity)
        self._lock = Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __call__(self, payload: dict[str, Any]) -> None:
        with self._lock:
            self._buffer.append(payload)

    def tail(self, limit: int | None = None) -> list[dict[str, Any]]:
        with self._lock:
            events = list(self._buffer)
        if limit is None or limit >= len(events):
            return events
        return events[-limit:]

    def names(self) -> list[str]:
        return [str(event.get("event")) for event in self.tail()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)


_HUB = TelemetryHub()


def get_telemetry_hub() -> TelemetryHub:
    return _HUB


def register_event_listener(pattern: str, callback: Listener) -> None:
    _HUB.subscribe(pattern, callback)


def unregister_event_listener(pattern: str, callback: Listener) -> None:
    _HUB.unsubscribe(pattern, callback)


def emit(event_name: str, payload: Mapping[str, Any] | None = None) -> None:
    _HUB.publish(event_name, payload)


__all__ = [
    "InMemoryEventSink",
    "TelemetryHub",
    "WILDCARD",
    "emit",
    "get_telemetry_hub",
    "register_event_listener",
    "unregister_event_listener",
]
