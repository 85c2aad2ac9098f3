"""Logging for wth runs.

Every module logs under the ``wth`` hierarchy: the pipeline reports the
analysed root and ignored configuration, the analyzers report unreadable
files and manifests, and the git layer reports failed or timed-out git
calls. Output stays at WARNING unless ``--verbose`` is given, so the report
on stdout is never interleaved with diagnostics.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "wth"
_CONSOLE_FORMAT = "[wth] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``wth.<name>``, e.g. ``get_logger("git.history")``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send wth diagnostics to stderr, and to ``log_file`` when given.

    ``verbose`` lowers the threshold to DEBUG, which surfaces skipped files,
    failed blame lookups and scan counts.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # The CLI and the service may both configure logging in one process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        fmt = _FILE_FORMAT if isinstance(handler, logging.FileHandler) else _CONSOLE_FORMAT
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
