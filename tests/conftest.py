"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Iterator

import pytest

from livetrack.errors import ResourceLoadFailure
from livetrack.host import FrameHost, reset_host, set_host
from livetrack.loader import set_live_editor_loader
from livetrack.services import telemetry as telemetry_service


class FakeInjector:
    """Scripted injector: each entry in ``outcomes`` is ``True`` (loads) or ``False`` (fails)."""

    def __init__(self, outcomes: list[bool] | None = None) -> None:
        self._outcomes = list(outcomes or [True])
        self.calls: list[tuple[str, str]] = []

    async def inject(self, url: str) -> None:
        self.calls.append(("inject", url))
        ok = self._outcomes.pop(0) if self._outcomes else False
        if not ok:
            raise ResourceLoadFailure(url, "scripted failure")

    def remove(self, url: str) -> None:
        self.calls.append(("remove", url))

    @property
    def inject_count(self) -> int:
        return sum(1 for action, _ in self.calls if action == "inject")


class RecordingScheduler:
    """Deterministic scheduler: records requested delays without waiting."""

    def __init__(self, injector: FakeInjector | None = None) -> None:
        self.sleeps: list[float] = []
        self._injector = injector

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(float(seconds))
        if self._injector is not None:
            self._injector.calls.append(("sleep", str(float(seconds))))


class SteppingClock:
    """Clock returning 1, 2, 3, ... on successive reads unless pinned."""

    def __init__(self) -> None:
        self.now = 0.0
        self.pinned = False

    def __call__(self) -> float:
        if not self.pinned:
            self.now += 1.0
        return self.now


@pytest.fixture(autouse=True)
def _reset_process_state() -> Iterator[None]:
    reset_host()
    set_live_editor_loader(None)
    yield
    reset_host()
    set_live_editor_loader(None)


@pytest.fixture
def live_url() -> str:
    return "https://app.example.com/page?contentstorage_live_editor=true"


@pytest.fixture
def embedded_host(live_url: str) -> FrameHost:
    host = FrameHost(location=live_url, top_frame_id="editor")
    set_host(host)
    return host


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def fake_injector_factory():
    return FakeInjector


@pytest.fixture
def recording_scheduler_factory():
    return RecordingScheduler


@pytest.fixture
def event_sink() -> Iterator[telemetry_service.InMemoryEventSink]:
    sink = telemetry_service.InMemoryEventSink()
    telemetry_service.register_event_listener(telemetry_service.WILDCARD, sink)
    yield sink
    telemetry_service.unregister_event_listener(telemetry_service.WILDCARD, sink)
