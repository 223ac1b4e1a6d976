"""Live editor mode detection."""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlsplit

from .host import HostEnvironment, get_host

__all__ = ["DEFAULT_LIVE_EDITOR_PARAM", "detect_live_editor_mode"]

LOGGER = logging.getLogger(__name__)

DEFAULT_LIVE_EDITOR_PARAM = "contentstorage_live_editor"


def detect_live_editor_mode(
    live_editor_param: str = DEFAULT_LIVE_EDITOR_PARAM,
    force_live_mode: bool = False,
    *,
    host: HostEnvironment | None = None,
) -> bool:
    """Return ``True`` when running embedded in the live editor.

    Both conditions must hold: the host is nested inside a different
    top-level context, and its query string carries ``live_editor_param``
    (any value, including blank). ``force_live_mode`` short-circuits the
    check. Errors while probing the host count as a negative result.
    """

    if force_live_mode:
        return True

    target = host if host is not None else get_host()
    if target is None:
        return False

    try:
        in_frame = target.self_context != target.top_context
        query = urlsplit(target.location).query
        has_marker = live_editor_param in parse_qs(query, keep_blank_values=True)
        return bool(in_frame and has_marker)
    except Exception:
        # Cross-origin hosts refuse access to the top context.
        LOGGER.debug("Live editor detection failed; assuming normal mode", exc_info=True)
        return False
