"""Activation options for live editor tracking."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping

from .detection import DEFAULT_LIVE_EDITOR_PARAM
from .loader import DEFAULT_DELAY_SECONDS, DEFAULT_RETRIES

__all__ = ["TrackingOptions", "DEFAULT_MAX_MEMORY_MAP_SIZE"]

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_MEMORY_MAP_SIZE = 10_000

_ENV_OVERRIDES: Mapping[str, str] = {
    "LIVETRACK_LIVE_EDITOR_PARAM": "live_editor_param",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "LIVETRACK_DEBUG": "debug",
    "LIVETRACK_FORCE_LIVE_MODE": "force_live_mode",
}
_INT_ENV_OVERRIDES: Mapping[str, str] = {
    "LIVETRACK_MAX_MEMORY_MAP_SIZE": "max_memory_map_size",
    "LIVETRACK_LOADER_RETRIES": "loader_retries",
}
_FLOAT_ENV_OVERRIDES: Mapping[str, str] = {
    "LIVETRACK_LOADER_DELAY": "loader_delay",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}


@dataclass(slots=True, frozen=True)
class TrackingOptions:
    """Configuration consumed by :func:`livetrack.provider.create_tracked_formatter`.

    Attributes:
        debug: Log tracking and loader diagnostics.
        force_live_mode: Skip environment detection and always activate.
        live_editor_param: Query parameter marking a live editor session.
        max_memory_map_size: Entry count the store is trimmed to after each write.
        loader_retries: Attempts allowed for the live editor script.
        loader_delay: Seconds to wait between attempts.
    """

    debug: bool = False
    force_live_mode: bool = False
    live_editor_param: str = DEFAULT_LIVE_EDITOR_PARAM
    max_memory_map_size: int = DEFAULT_MAX_MEMORY_MAP_SIZE
    loader_retries: int = DEFAULT_RETRIES
    loader_delay: float = DEFAULT_DELAY_SECONDS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "TrackingOptions":
        """Build options from ``LIVETRACK_*`` variables; keyword overrides win."""

        source = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = source.get(env_name)
            if value:
                values[field_name] = value.strip()
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = source.get(env_name)
            if value is not None:
                values[field_name] = value.strip().lower() in _TRUE_VALUES
        for env_name, field_name in _INT_ENV_OVERRIDES.items():
            value = source.get(env_name)
            if value is None:
                continue
            try:
                values[field_name] = int(value, 10)
            except ValueError:
                LOGGER.warning("Environment override %s=%s is not a valid integer", env_name, value)
        for env_name, field_name in _FLOAT_ENV_OVERRIDES.items():
            value = source.get(env_name)
            if value is None:
                continue
            try:
                values[field_name] = float(value)
            except ValueError:
                LOGGER.warning("Environment override %s=%s is not a valid float", env_name, value)
        values.update(overrides)
        return replace(cls(), **values)
