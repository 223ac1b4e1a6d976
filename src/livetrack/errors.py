"""Error types raised inside the live editor tracking layer.

None of these reach callers of detection, tracking or the loader outcome:
collaborators raise them and the owning component folds them into a
negative result.
"""

from __future__ import annotations

__all__ = [
    "LiveTrackError",
    "EnvironmentUnavailable",
    "AccessDenied",
    "ResourceLoadFailure",
]


class LiveTrackError(Exception):
    """Base class for all live editor tracking errors."""


class EnvironmentUnavailable(LiveTrackError):
    """Raised when no host environment is registered for the process."""


class AccessDenied(LiveTrackError, PermissionError):
    """Raised when probing the enclosing context is blocked by the host."""


class ResourceLoadFailure(LiveTrackError):
    """A single attempt to load the live editor resource failed.

    Attributes:
        url: The resource locator that failed to load.
        attempt: One-based attempt number, when known.
    """

    def __init__(self, url: str, message: str = "", *, attempt: int | None = None) -> None:
        self.url = url
        self.attempt = attempt
        detail = message or "resource failed to load"
        super().__init__(f"{detail} ({url})")
