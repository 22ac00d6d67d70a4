"""Logging helpers shared by the scraper components and the CLI."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT = "tfmeta"
_CONSOLE_FORMAT = "[tfmeta] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the logger for a scraper component (``tfmeta.<component>``)."""
    if not component:
        return logging.getLogger(_ROOT)
    return logging.getLogger(f"{_ROOT}.{component}")


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the ``tfmeta`` logger.

    The file handler always records debug output so a failed run can be
    inspected without re-running with ``--verbose``.
    """
    console_level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(_ROOT)
    logger.setLevel(logging.DEBUG if (verbose or log_file is not None) else console_level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["configure_logging", "get_logger"]
