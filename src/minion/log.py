"""Logging setup for the task runner process."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str = "warning", log_file: Path | None = None) -> logging.Logger:
    """Configure the ``minion`` logger.

    Logs go to ``log_file`` when given, otherwise to stderr so they never mix
    with task output on stdout.
    """

    log_level = getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger("minion")
    logger.setLevel(log_level)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
