"""Logging setup for the `watersim` namespace.

Frames are drawn on stdout, so log records go to stderr and, optionally, a file.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.WARNING, log_file: str | None = None) -> None:
    """Attach stderr (and optional file) handlers to the package logger at `level`."""

    logger = logging.getLogger("watersim")
    logger.setLevel(level)

    # main() may run more than once in a process.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized.")
