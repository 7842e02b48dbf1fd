"""Logging utilities for gramcat commands."""

from __future__ import annotations

import logging
import textwrap
from enum import IntEnum

_LOGGER_NAME = "gramcat"
_WRAP_WIDTH = 70


class Verbosity(IntEnum):
    """Console verbosity levels, from quietest to noisiest."""

    SILENT = 0
    ERROR = 1
    WARNING = 2
    DEBUG = 3


_LEVELS = {
    Verbosity.SILENT: logging.CRITICAL + 10,
    Verbosity.ERROR: logging.ERROR,
    Verbosity.WARNING: logging.WARNING,
    Verbosity.DEBUG: logging.DEBUG,
}


class WrappingFormatter(logging.Formatter):
    """Render ``LEVEL: message`` wrapped to a fixed width.

    Continuation lines are indented by two spaces so multi-line warnings stay
    readable next to the table written on stdout.
    """

    def __init__(self, width: int = _WRAP_WIDTH) -> None:
        super().__init__("%(levelname)s: %(message)s")
        self.width = width

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        lines: list[str] = []
        for paragraph in text.splitlines() or [""]:
            wrapped = textwrap.wrap(paragraph, width=self.width, subsequent_indent="  ")
            lines.extend(wrapped or [""])
        return "\n".join(lines)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the gramcat hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbosity: Verbosity = Verbosity.WARNING) -> logging.Logger:
    """Configure the gramcat logger with stderr output."""
    level = _LEVELS[Verbosity(verbosity)]
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(WrappingFormatter())
    logger.addHandler(stream_handler)

    return logger


__all__ = ["Verbosity", "WrappingFormatter", "configure_logging", "get_logger"]
