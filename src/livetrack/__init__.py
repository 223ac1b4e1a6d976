"""Live editor translation tracking for message formatters."""

from .detection import DEFAULT_LIVE_EDITOR_PARAM, detect_live_editor_mode
from .errors import AccessDenied, EnvironmentUnavailable, LiveTrackError, ResourceLoadFailure
from .formatter import CatalogFormatter, MessageDescriptor, MessageFormatter
from .host import FrameHost, HostEnvironment, HostGlobals, get_host, reset_host, set_host
from .inspector import DebugReport, debug_memory_map, inspect_memory_map
from .loader import (
    LIVE_EDITOR_SCRIPT_URL,
    LiveEditorLoader,
    LoaderState,
    get_live_editor_loader,
    load_live_editor_script,
    set_live_editor_loader,
)
from .messages import Messages, flatten_messages
from .provider import TrackedFormatter, create_tracked_formatter
from .settings import TrackingOptions
from .store import (
    TrackingEntry,
    TrackingStore,
    cleanup_memory_map,
    get_memory_map,
    initialize_memory_map,
    track_translation,
)

__all__ = [
    "AccessDenied",
    "CatalogFormatter",
    "DEFAULT_LIVE_EDITOR_PARAM",
    "DebugReport",
    "EnvironmentUnavailable",
    "FrameHost",
    "HostEnvironment",
    "HostGlobals",
    "LIVE_EDITOR_SCRIPT_URL",
    "LiveEditorLoader",
    "LiveTrackError",
    "LoaderState",
    "MessageDescriptor",
    "MessageFormatter",
    "Messages",
    "ResourceLoadFailure",
    "TrackedFormatter",
    "TrackingEntry",
    "TrackingOptions",
    "TrackingStore",
    "cleanup_memory_map",
    "create_tracked_formatter",
    "debug_memory_map",
    "detect_live_editor_mode",
    "flatten_messages",
    "get_host",
    "get_live_editor_loader",
    "get_memory_map",
    "initialize_memory_map",
    "inspect_memory_map",
    "load_live_editor_script",
    "reset_host",
    "set_host",
    "set_live_editor_loader",
    "track_translation",
]
