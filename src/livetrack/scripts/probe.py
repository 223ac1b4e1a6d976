"""CLI helper to check whether live editor tracking would activate for a URL."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Sequence

from ..detection import DEFAULT_LIVE_EDITOR_PARAM, detect_live_editor_mode
from ..host import FrameHost
from ..loader import DEFAULT_DELAY_SECONDS, DEFAULT_RETRIES, LiveEditorLoader
from ..settings import TrackingOptions
from ..utils.logging import configure_logging


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Probe live editor detection and script loading.")
    parser.add_argument("--url", required=True, help="Page URL including its query string.")
    parser.add_argument("--embedded", action="store_true", help="Treat the page as nested in another frame.")
    parser.add_argument("--param", default=DEFAULT_LIVE_EDITOR_PARAM, help="Query parameter marking live mode.")
    parser.add_argument("--force", action="store_true", help="Force live mode regardless of the URL.")
    parser.add_argument("--load", action="store_true", help="Also try to fetch the live editor script.")
    parser.add_argument("--retries", type=int, default=DEFAULT_RETRIES, help="Attempts for --load.")
    parser.add_argument("--delay", type=float, default=DEFAULT_DELAY_SECONDS, help="Seconds between attempts.")
    parser.add_argument("--log-dir", type=Path, help="Directory for the rotating log file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    options = TrackingOptions(
        debug=args.verbose,
        force_live_mode=args.force,
        live_editor_param=args.param,
        loader_retries=args.retries,
        loader_delay=args.delay,
    )
    configure_logging(options, log_dir=args.log_dir)

    host = FrameHost(location=args.url, top_frame_id="parent" if args.embedded else None)
    active = detect_live_editor_mode(options.live_editor_param, options.force_live_mode, host=host)
    print(f"url: {args.url}")
    print(f"embedded: {args.embedded}")
    print(f"live editor mode: {'active' if active else 'inactive'}")

    if args.load:
        loaded = asyncio.run(_load(options.loader_retries, options.loader_delay, options.debug))
        print(f"live editor script: {'loaded' if loaded else 'failed'}")
    return 0 if active else 1


async def _load(retries: int, delay: float, debug: bool) -> bool:
    loader = LiveEditorLoader()
    return await loader.load(retries, delay, debug)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
