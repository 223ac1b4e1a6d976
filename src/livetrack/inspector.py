"""Read-only diagnostics for the tracking store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .host import HostEnvironment
from .store import get_memory_map

__all__ = ["DebugRow", "DebugReport", "inspect_memory_map", "debug_memory_map"]

LOGGER = logging.getLogger(__name__)

PREVIEW_LIMIT = 10
VALUE_PREVIEW_CHARS = 50
ID_DELIMITER = ", "


@dataclass(slots=True, frozen=True)
class DebugRow:
    value: str
    keys: str


@dataclass(slots=True)
class DebugReport:
    """Entry count plus a bounded preview of the store."""

    total: int
    rows: list[DebugRow] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return max(0, self.total - len(self.rows))

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "rows": [{"value": row.value, "keys": row.keys} for row in self.rows],
            "remaining": self.remaining,
        }

    def as_lines(self) -> list[str]:
        lines = ["Memory map contents:", f"Total entries: {self.total}"]
        for row in self.rows:
            lines.append(f"  {row.value!r} -> {row.keys}")
        if self.remaining:
            lines.append(f"... and {self.remaining} more entries")
        return lines


def inspect_memory_map(host: HostEnvironment | None = None) -> DebugReport | None:
    store = get_memory_map(host)
    if store is None:
        return None
    rows = [
        DebugRow(value=value[:VALUE_PREVIEW_CHARS], keys=ID_DELIMITER.join(sorted(entry.ids)))
        for value, entry in store.items()[:PREVIEW_LIMIT]
    ]
    return DebugReport(total=len(store), rows=rows)


def debug_memory_map(host: HostEnvironment | None = None) -> DebugReport | None:
    """Log the store preview; the store itself is left untouched."""

    report = inspect_memory_map(host)
    if report is None:
        LOGGER.info("Memory map not initialized")
        return None
    for line in report.as_lines():
        LOGGER.info(line)
    return report
