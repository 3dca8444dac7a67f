"""Logging configuration using loguru.

The package disables its own loguru records on import (library default).
``setup_logging`` re-enables them for CLI use, installs a single stderr sink
at the requested level and routes stdlib logging through loguru.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

from bun_workspaces.models.enums import LogLevel

LOG_PREFIX = "[bun-workspaces]"

# CLI level name -> loguru level name.  ``silent`` has no sink at all.
_LOGURU_LEVELS: dict[LogLevel, str] = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARN: "WARNING",
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
}


class _StdlibBridge(logging.Handler):
    """Send stdlib records (asyncio, anyio) to the loguru sink.

    The event loop reports unretrieved task errors and slow callbacks through
    ``logging``; routing them here gives them the same prefix and level
    filter, and mutes them at ``silent``.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the caller.
        depth, frame = 2, logging.currentframe()
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            depth, frame = depth + 1, frame.f_back

        logger.opt(depth=depth, exception=record.exc_info).log(level, "{}: {}", record.name, record.getMessage())


def setup_logging(level: LogLevel | str = LogLevel.INFO) -> None:
    """Configure loguru as the sole logging sink.

    Call this once per CLI invocation, before the project is loaded.
    """
    level = LogLevel(str(level).lower())

    logger.remove()
    logger.enable("bun_workspaces")

    if level is LogLevel.SILENT:
        logging.basicConfig(handlers=[logging.NullHandler()], force=True)
        return

    debug = level is LogLevel.DEBUG
    logger.add(
        sys.stderr,
        level=_LOGURU_LEVELS[level],
        format=(
            f"<dim>{LOG_PREFIX}</dim> "
            + ("<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - " if debug else "")
            + "<level>{message}</level>"
        ),
    )

    logging.basicConfig(handlers=[_StdlibBridge()], level=logging.WARNING, force=True)

    logger.debug("Log level: {}", level)


def is_silent(level: LogLevel | str) -> bool:
    return LogLevel(str(level).lower()) is LogLevel.SILENT
