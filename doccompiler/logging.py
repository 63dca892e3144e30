"""Logging utilities for doccompiler passes."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "doccompiler"
_CONSOLE_FORMAT = "[doccompiler] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the doccompiler hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def level_from_name(level: str | int) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value."""
    if isinstance(level, int):
        return level
    try:
        return LEVELS[level.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level {level!r}; expected one of {', '.join(LEVELS)}"
        ) from None


def configure_logging(level: str | int = "info", log_file: Path | None = None) -> logging.Logger:
    """Attach console and optional file handlers to the doccompiler logger.

    Calling it again replaces the handlers of the previous call, so compilers
    built one after another do not duplicate output.
    """
    numeric_level = level_from_name(level)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["LEVELS", "configure_logging", "get_logger", "level_from_name"]
