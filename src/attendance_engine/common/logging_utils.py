"""
Logging helpers.

All loggers live under the ``attendance_engine`` namespace; handlers are
attached once to that root so module loggers only need ``get_logger``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "attendance_engine"

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the package root logger.

    Args:
        level: Console level name, e.g. "INFO" or "DEBUG"
        log_file: Optional path of a log file receiving DEBUG and above

    Returns:
        The configured root logger of the package
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)

    # Avoid adding handlers multiple times
    if root.handlers:
        return root

    root.setLevel(logging.DEBUG)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(Path(log_file), mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            # If file logging fails, just log to console
            root.warning("Cannot open log file %s: %s", log_file, e)

    return root


def get_logger(name: str) -> logging.Logger:
    """Child logger of the package root, e.g. ``get_logger("classifier")``."""
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
