"""Single-flight loader for the live editor script.

The first :meth:`LiveEditorLoader.load` call starts one attempt sequence on
the running event loop; every later call, whatever its arguments, observes
the same outcome. Failed attempts are cleaned up and retried after a fixed
delay. The outcome is a plain boolean and failures never propagate.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Protocol

import httpx
from tenacity import AsyncRetrying, RetryError, retry_if_exception_type, stop_after_attempt, wait_fixed

from .errors import EnvironmentUnavailable, ResourceLoadFailure
from .host import require_host
from .services import telemetry as telemetry_service

__all__ = [
    "LIVE_EDITOR_SCRIPT_URL",
    "LoaderState",
    "ResourceInjector",
    "Scheduler",
    "AsyncioScheduler",
    "HttpScriptInjector",
    "LiveEditorLoader",
    "get_live_editor_loader",
    "set_live_editor_loader",
    "load_live_editor_script",
]

LOGGER = logging.getLogger(__name__)

LIVE_EDITOR_SCRIPT_URL = "https://cdn.contentstorage.app/live-editor.js?contentstorage-live-editor=true"
DEFAULT_RETRIES = 2
DEFAULT_DELAY_SECONDS = 3.0


class LoaderState(Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"


class ResourceInjector(Protocol):
    """Capability that attaches the remote resource to the host."""

    async def inject(self, url: str) -> None:  # pragma: no cover - protocol stub
        """Attach ``url``; raise :class:`ResourceLoadFailure` when it fails to load."""
        ...

    def remove(self, url: str) -> None:  # pragma: no cover - protocol stub
        ...


class Scheduler(Protocol):
    async def sleep(self, seconds: float) -> None:  # pragma: no cover - protocol stub
        ...


class AsyncioScheduler:
    """Real-time scheduler backed by :func:`asyncio.sleep`."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class HttpScriptInjector:
    """Fetches the script over HTTP and keeps the loaded sources attached."""

    def __init__(self, *, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._timeout = timeout
        self._transport = transport
        self.loaded: dict[str, str] = {}

    async def inject(self, url: str) -> None:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, follow_redirects=True, transport=self._transport
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ResourceLoadFailure(url, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise ResourceLoadFailure(url, str(exc) or type(exc).__name__) from exc
        self.loaded[url] = response.text

    def remove(self, url: str) -> None:
        self.loaded.pop(url, None)


class LiveEditorLoader:
    """Explicit state machine around one memoized load attempt sequence."""

    def __init__(
        self,
        injector: ResourceInjector | None = None,
        *,
        scheduler: Scheduler | None = None,
        url: str = LIVE_EDITOR_SCRIPT_URL,
    ) -> None:
        self._injector = injector or HttpScriptInjector()
        self._scheduler = scheduler or AsyncioScheduler()
        self._url = url
        self._task: asyncio.Future[bool] | None = None
        self.state = LoaderState.IDLE
        self.attempt = 0
        self.max_attempts = 0
        self.outcome: bool | None = None

    @property
    def url(self) -> str:
        return self._url

    def load(
        self,
        max_attempts: int = DEFAULT_RETRIES,
        delay: float = DEFAULT_DELAY_SECONDS,
        debug: bool = False,
    ) -> asyncio.Future[bool]:
        """Start the attempt sequence once and return the shared outcome.

        Must be called with a running event loop. Arguments of any call after
        the first are ignored. Each caller gets its own shielded view, so
        cancelling one wait leaves the attempt sequence running for the rest.
        """

        if self._task is not None:
            return asyncio.shield(self._task)
        loop = asyncio.get_running_loop()
        self.max_attempts = max(1, int(max_attempts))
        self.state = LoaderState.PENDING
        self._task = loop.create_task(self._run(self.max_attempts, max(0.0, float(delay)), debug))
        return asyncio.shield(self._task)

    async def _run(self, max_attempts: int, delay: float, debug: bool) -> bool:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_fixed(delay),
            retry=retry_if_exception_type(ResourceLoadFailure),
            sleep=self._scheduler.sleep,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    await self._attempt(attempt.retry_state.attempt_number, max_attempts, debug)
        except RetryError:
            LOGGER.error("All %s attempts to load live editor script failed", max_attempts)
            return self._resolve(False)
        except Exception:
            LOGGER.error("Live editor script load aborted unexpectedly", exc_info=True)
            return self._resolve(False)
        if debug:
            LOGGER.info("Live editor script loaded successfully")
        telemetry_service.emit("live_editor.loaded", {"attempts": self.attempt})
        return self._resolve(True)

    async def _attempt(self, attempt: int, max_attempts: int, debug: bool) -> None:
        self.attempt = attempt
        if debug:
            LOGGER.info("Attempting to load live editor script (attempt %s/%s)", attempt, max_attempts)
        try:
            await self._injector.inject(self._url)
        except Exception as exc:
            self._discard()
            if debug:
                LOGGER.error(
                    "Failed to load live editor script (attempt %s/%s): %s", attempt, max_attempts, exc
                )
            telemetry_service.emit(
                "live_editor.load_attempt_failed",
                {"attempt": attempt, "max_attempts": max_attempts, "url": self._url},
            )
            if isinstance(exc, ResourceLoadFailure):
                exc.attempt = attempt
                raise
            raise ResourceLoadFailure(self._url, str(exc) or type(exc).__name__, attempt=attempt) from exc

    def _discard(self) -> None:
        try:
            self._injector.remove(self._url)
        except Exception:
            LOGGER.debug("Removing failed live editor script raised", exc_info=True)

    def _resolve(self, outcome: bool) -> bool:
        self.outcome = outcome
        self.state = LoaderState.RESOLVED
        return outcome


_GLOBAL_LOADER: LiveEditorLoader | None = None


def get_live_editor_loader() -> LiveEditorLoader:
    global _GLOBAL_LOADER
    if _GLOBAL_LOADER is None:
        _GLOBAL_LOADER = LiveEditorLoader()
    return _GLOBAL_LOADER


def set_live_editor_loader(loader: LiveEditorLoader | None) -> LiveEditorLoader:
    global _GLOBAL_LOADER
    _GLOBAL_LOADER = loader
    if _GLOBAL_LOADER is None:
        _GLOBAL_LOADER = LiveEditorLoader()
    return _GLOBAL_LOADER


async def load_live_editor_script(
    retries: int = DEFAULT_RETRIES,
    delay: float = DEFAULT_DELAY_SECONDS,
    debug: bool = False,
) -> bool:
    """Await the process-wide loader; ``False`` straight away without a host."""

    try:
        require_host()
    except EnvironmentUnavailable:
        LOGGER.debug("No host available; live editor script not loaded")
        return False
    return await get_live_editor_loader().load(retries, delay, debug)
