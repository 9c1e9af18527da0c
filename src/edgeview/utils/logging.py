"""Logging helpers for edgeview."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER: Optional[logging.Logger] = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(level: int | str | None = None) -> logging.Logger:
    """Return the package logger, installing a stream handler on first use.

    *level* overrides the default ``INFO`` threshold.  Child loggers created
    with ``logging.getLogger(__name__)`` inside the package propagate here.
    """

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger("edgeview")
        if not _LOGGER.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(LOG_FORMAT)
            handler.setFormatter(formatter)
            _LOGGER.addHandler(handler)
        _LOGGER.setLevel(logging.INFO)
    if level is not None:
        _LOGGER.setLevel(level.upper() if isinstance(level, str) else level)
    return _LOGGER
