"""Host environment abstraction and the process-wide host slot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Protocol

from .errors import AccessDenied, EnvironmentUnavailable

if TYPE_CHECKING:
    from .store import TrackingStore

__all__ = [
    "HostGlobals",
    "HostEnvironment",
    "FrameHost",
    "get_host",
    "require_host",
    "set_host",
    "reset_host",
]

LOGGER = logging.getLogger(__name__)

_EMBEDDED_FETCH_DESTINATIONS = frozenset({"iframe", "frame"})


@dataclass(slots=True)
class HostGlobals:
    """Well-known slot shared by every activation inside one host."""

    memory_map: TrackingStore | None = None
    debug: bool = False


class HostEnvironment(Protocol):
    """Capabilities the tracking layer needs from its execution context."""

    globals: HostGlobals

    @property
    def location(self) -> str:  # pragma: no cover - protocol stub
        ...

    @property
    def self_context(self) -> Any:  # pragma: no cover - protocol stub
        ...

    @property
    def top_context(self) -> Any:  # pragma: no cover - protocol stub
        ...


@dataclass(slots=True)
class FrameHost:
    """Concrete host describing a page that may be nested in another frame.

    ``top_frame_id`` of ``None`` means the page is its own top-level context.
    When ``cross_origin`` is set, reading :attr:`top_context` raises
    :class:`AccessDenied`, the same way a browser blocks ``window.top``
    across origins.
    """

    location: str
    frame_id: str = "self"
    top_frame_id: str | None = None
    cross_origin: bool = False
    globals: HostGlobals = field(default_factory=HostGlobals)

    @property
    def self_context(self) -> str:
        return self.frame_id

    @property
    def top_context(self) -> str:
        if self.cross_origin:
            raise AccessDenied(f"top-level context of {self.frame_id!r} is not accessible")
        return self.top_frame_id if self.top_frame_id is not None else self.frame_id

    @classmethod
    def from_request(cls, url: str, headers: Mapping[str, str] | None = None) -> "FrameHost":
        """Build a host for a server-rendered request.

        The page counts as embedded when the browser announced an iframe
        destination through ``Sec-Fetch-Dest``.
        """

        normalized = {str(key).lower(): str(value) for key, value in (headers or {}).items()}
        destination = normalized.get("sec-fetch-dest", "").strip().lower()
        embedded = destination in _EMBEDDED_FETCH_DESTINATIONS
        return cls(location=url, top_frame_id="parent" if embedded else None)


_ACTIVE_HOST: HostEnvironment | None = None


def get_host() -> HostEnvironment | None:
    """Return the host registered for this process, if any."""

    return _ACTIVE_HOST


def require_host() -> HostEnvironment:
    """Return the active host or raise :class:`EnvironmentUnavailable`."""

    if _ACTIVE_HOST is None:
        raise EnvironmentUnavailable("no live editor host registered for this process")
    return _ACTIVE_HOST


def set_host(host: HostEnvironment | None) -> HostEnvironment | None:
    global _ACTIVE_HOST
    _ACTIVE_HOST = host
    if host is not None:
        LOGGER.debug("Registered live editor host at %s", host.location)
    return _ACTIVE_HOST


def reset_host() -> None:
    """Drop the active host together with its tracking store."""

    global _ACTIVE_HOST
    if _ACTIVE_HOST is not None:
        _ACTIVE_HOST.globals.memory_map = None
        _ACTIVE_HOST.globals.debug = False
    _ACTIVE_HOST = None
