################################################################################
# VACKUP
#
# @file:        logging.py
# @module:      vackup.helpers.logging
# @description: Logger factory and one-shot logging configuration for vackup.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Logging helpers for vackup.

All modules obtain loggers through :func:`get_logger` so that they share the
``vackup`` namespace. :data:`log_manager` installs handlers exactly once per
process; calling :meth:`LogManager.configure` again only swaps the level and
handlers.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from ..constants import DEFAULT_LOG_LEVEL, LOG_DATE_FORMAT, LOG_FORMAT

ROOT_LOGGER_NAME = "vackup"


class Colors:
    """ANSI color codes for terminal log output."""

    RESET = "\033[0m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    BOLD_RED = "\033[1;31m"

    LEVELS = {
        logging.DEBUG: DIM,
        logging.INFO: CYAN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }


class StructuredFormatter(logging.Formatter):
    """
    Formatter producing ``time - logger - LEVEL - message`` lines.

    Args:
        use_colors: Wrap the level name in ANSI colors
    """

    def __init__(self, use_colors: bool = False):
        super().__init__(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)
        original = record.levelname
        color = Colors.LEVELS.get(record.levelno, "")
        record.levelname = f"{color}{original}{Colors.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class ConsoleHandler(logging.StreamHandler):
    """StreamHandler bound to whatever sys.stderr is at emit time."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


class LogManager:
    """Owns the handlers attached to the ``vackup`` logger."""

    def __init__(self):
        self._handlers = []
        self.level = DEFAULT_LOG_LEVEL

    def configure(self, level: str = DEFAULT_LOG_LEVEL, log_file: Optional[Path] = None) -> None:
        """
        Configure the ``vackup`` logger.

        Args:
            level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file receiving the same records

        Raises:
            ValueError: If the level name is unknown
        """
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")

        logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in self._handlers:
            logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        stream = ConsoleHandler()
        stream.setFormatter(StructuredFormatter(use_colors=sys.stderr.isatty()))
        self._handlers.append(stream)

        if log_file:
            log_file = Path(log_file).expanduser()
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(StructuredFormatter())
            self._handlers.append(file_handler)

        for handler in self._handlers:
            logger.addHandler(handler)
        logger.setLevel(numeric)
        logger.propagate = False
        self.level = level.upper()


log_manager = LogManager()


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the ``vackup`` namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
