"""Service layer helpers (telemetry)."""

from .telemetry import (
    InMemoryEventSink,
    TelemetryHub,
    emit,
    get_telemetry_hub,
    register_event_listener,
    unregister_event_listener,
)

__all__ = [
    "InMemoryEventSink",
    "TelemetryHub",
    "get_telemetry_hub",
    "emit",
    "register_event_listener",
    "unregister_event_listener",
]
