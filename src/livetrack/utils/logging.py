"""Logging configuration for the live editor tracking layer.

Handlers are attached to the ``livetrack`` package logger rather than the
root logger, so embedding applications keep their own logging setup. The
level follows :attr:`TrackingOptions.debug`: tracking chatter is visible in
debug sessions and only warnings surface otherwise.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from ..settings import TrackingOptions

__all__ = ["PACKAGE_LOGGER", "configure_logging", "reset_logging"]

PACKAGE_LOGGER = "livetrack"
LOG_FILE_NAME = "livetrack.log"
_LOG_DIR_ENV = "LIVETRACK_LOG_DIR"
_TRANSPORT_LOGGERS: tuple[str, ...] = ("asyncio", "httpx", "httpcore")
_OWNED_MARKER = "_livetrack_owned"


def configure_logging(
    options: TrackingOptions | None = None,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 512_000,
    backup_count: int = 2,
) -> Path | None:
    """Attach handlers to the package logger and return the log file, if any.

    A rotating file is written only when ``log_dir`` or ``LIVETRACK_LOG_DIR``
    names a directory. Calling again replaces the handlers installed earlier.
    """

    opts = options or TrackingOptions()
    level = logging.DEBUG if opts.debug else logging.WARNING
    logger = logging.getLogger(PACKAGE_LOGGER)
    reset_logging()
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_path: Path | None = None
    target_dir = log_dir or os.environ.get(_LOG_DIR_ENV)
    if target_dir:
        directory = Path(target_dir).expanduser()
        directory.mkdir(parents=True, exist_ok=True)
        log_path = directory / LOG_FILE_NAME
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        _install(logger, file_handler, formatter)

    if console:
        _install(logger, logging.StreamHandler(), formatter)

    # Transport libraries stay quiet unless the session is being debugged.
    transport_level = logging.DEBUG if opts.debug else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return log_path


def reset_logging() -> None:
    """Detach and close handlers installed by :func:`configure_logging`."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, _OWNED_MARKER, False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)


def _install(logger: logging.Logger, handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setFormatter(formatter)
    setattr(handler, _OWNED_MARKER, True)
    logger.addHandler(handler)
