"""Logging configuration for the clipbridge CLI."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s [clipbridge] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

# Parent of every module logger in the package.
PACKAGE_LOGGER = "clipbridge"

# Above CRITICAL, so a disabled log stays empty.
SILENT: int = logging.CRITICAL + 1


def log_level(enabled: bool, debug: bool) -> int:
    """Pick the log level for the given switches.

    Args:
        enabled: If False, nothing is logged.
        debug: If True (and enabled), per-cycle debug lines are logged.
    """
    if not enabled:
        return SILENT
    return logging.DEBUG if debug else logging.INFO


def configure_logging(
    enabled: bool, debug: bool, log_path: Path | None = None
) -> logging.Handler:
    """Send the package's log lines to a file or to standard output.

    Args:
        enabled: Whether any lines are emitted.
        debug: Whether debug lines are emitted.
        log_path: Log file to append to, or None for stdout. Missing
            parent directories are created.

    Returns:
        The installed handler, to be released with close_logging().

    Raises:
        OSError: If the log file cannot be opened.
    """
    handler: logging.Handler
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level(enabled, debug))
    logger.addHandler(handler)
    return handler


def close_logging(handler: logging.Handler) -> None:
    """Flush, detach and close a handler installed by configure_logging()."""
    handler.flush()
    logging.getLogger(PACKAGE_LOGGER).removeHandler(handler)
    handler.close()
