"""Tracking facade around a message formatter.

:func:`create_tracked_formatter` is a drop-in replacement for building a
formatter directly. Outside the live editor it hands back the plain
formatter; inside, it seeds the tracking store with the catalog, starts the
live editor script load, and returns a :class:`TrackedFormatter` that records
every string it renders.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from .detection import detect_live_editor_mode
from .formatter import CatalogFormatter, DescriptorLike, MessageFormatter, descriptor_id
from .host import HostEnvironment, get_host
from .loader import LiveEditorLoader, get_live_editor_loader
from .messages import flatten_messages
from .services import telemetry as telemetry_service
from .settings import TrackingOptions
from .store import cleanup_memory_map, initialize_memory_map, track_translation

__all__ = ["TrackedFormatter", "create_tracked_formatter"]

LOGGER = logging.getLogger(__name__)


class TrackedFormatter:
    """Formatter proxy that records each rendered string against its message id."""

    def __init__(
        self,
        base: MessageFormatter,
        *,
        options: TrackingOptions,
        host: HostEnvironment | None,
        loader: LiveEditorLoader,
    ) -> None:
        self._base = base
        self._options = options
        self._host = host
        self._loader = loader

    @property
    def base(self) -> MessageFormatter:
        return self._base

    @property
    def debug(self) -> bool:
        return self._options.debug

    @property
    def options(self) -> TrackingOptions:
        return self._options

    @property
    def locale(self) -> str:
        return self._base.locale

    @property
    def messages(self) -> Mapping[str, Any]:
        return self._base.messages

    def format_message(self, descriptor: DescriptorLike, values: Mapping[str, Any] | None = None) -> Any:
        result = self._base.format_message(descriptor, values)
        message_id = descriptor_id(descriptor)
        if isinstance(result, str) and message_id:
            track_translation(result, message_id, self.locale, debug=self._options.debug, host=self._host)
            if self._options.max_memory_map_size:
                cleanup_memory_map(self._options.max_memory_map_size, host=self._host)
        return result

    def start_loader(self) -> asyncio.Future[bool]:
        return self._loader.load(self._options.loader_retries, self._options.loader_delay, self._options.debug)

    async def ready(self) -> bool:
        """Wait for the shared live editor script outcome."""

        if self._host is None:
            return False
        loaded = await self.start_loader()
        if loaded:
            if self._options.debug:
                LOGGER.info("Live editor ready")
        else:
            LOGGER.warning("Failed to load live editor script")
        return loaded

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._base, name)


def create_tracked_formatter(
    locale: str,
    messages: Mapping[str, Any] | None = None,
    *,
    options: TrackingOptions | None = None,
    formatter: MessageFormatter | None = None,
    host: HostEnvironment | None = None,
    loader: LiveEditorLoader | None = None,
) -> MessageFormatter | TrackedFormatter:
    """Return a formatter for ``locale`` that tracks renders in live editor mode."""

    opts = options or TrackingOptions()
    if messages is None and formatter is not None:
        messages = getattr(formatter, "messages", None)
    catalog = messages or {}
    base = formatter or CatalogFormatter(locale, catalog)

    if not detect_live_editor_mode(opts.live_editor_param, opts.force_live_mode, host=host):
        if opts.debug:
            LOGGER.info("Running in normal mode (not live editor)")
        return base

    if opts.debug:
        LOGGER.info("Live editor mode enabled")

    target = host if host is not None else get_host()
    if target is not None:
        target.globals.debug = target.globals.debug or opts.debug
    initialize_memory_map(target)

    tracked = TrackedFormatter(base, options=opts, host=target, loader=loader or get_live_editor_loader())
    if target is not None:
        _start_loader(tracked)

    flat = flatten_messages(catalog)
    for message_id, value in flat:
        track_translation(value, message_id, locale, debug=opts.debug, host=target)
    if opts.debug:
        LOGGER.info("Tracked %s static messages", len(flat))

    telemetry_service.emit("live_editor.activated", {"locale": locale, "static_messages": len(flat)})
    if opts.debug:
        LOGGER.info("Live editor tracking initialized")
    return tracked


def _start_loader(tracked: TrackedFormatter) -> None:
    try:
        task = tracked.start_loader()
    except RuntimeError:
        LOGGER.debug("No running event loop; live editor script load deferred until ready()")
        return
    task.add_done_callback(_report_loader_outcome(debug=tracked.debug))


def _report_loader_outcome(*, debug: bool):
    def _callback(task: asyncio.Future[bool]) -> None:
        if task.cancelled():
            return
        if task.result():
            if debug:
                LOGGER.info("Live editor ready")
        else:
            LOGGER.warning("Failed to load live editor script")

    return _callback
