"""Logging setup for cobratask: console output plus an optional build transcript."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "cobratask"
_CONSOLE_FORMAT = "[cobratask] %(levelname)s %(message)s"
_TRANSCRIPT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the cobratask hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure console output and, with ``log_file``, a full build transcript.

    The transcript always records at DEBUG, so it keeps every line the
    compiler printed, including lines that are not diagnostics. The console
    shows DEBUG only with ``verbose``.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    # Handlers from an earlier call in the same process would duplicate output
    # and keep an old transcript open.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        transcript = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        transcript.setLevel(logging.DEBUG)
        transcript.setFormatter(logging.Formatter(_TRANSCRIPT_FORMAT))
        logger.addHandler(transcript)

    return logger


__all__ = ["configure_logging", "get_logger"]
