"""Handlers for the ``time_dilation_clock`` logger.

Table builds, calibration and run summaries log at INFO; minute rollovers at
DEBUG (``--verbose``); overflow-guard stops at WARNING.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

PACKAGE_LOGGER = "time_dilation_clock"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the clock's log records to stdout and, optionally, a file.

    Args:
        level: Threshold for the package logger and its handlers.
        log_file: Path of a log file, truncated on every run.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging to {len(handlers)} handler(s) at {logging.getLevelName(level)}")
    return logger
