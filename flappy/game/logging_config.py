"""Logging setup shared by the playable game and the experiment scripts."""

from __future__ import annotations

import logging
import os

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


def configure_logging(*, level: str | None = None, format: str = DEFAULT_FORMAT) -> logging.Logger:
    """Configure root logging and return the ``flappy`` logger.

    Args:
        level: Optional explicit log level. Falls back to the ``FLAPPY_LOG_LEVEL``
            env var or INFO when not provided.
        format: Log format string.
    """
    raw_level = level if level is not None else os.getenv("FLAPPY_LOG_LEVEL")
    resolved_level = (raw_level or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=format, datefmt=DEFAULT_DATEFMT)

    app_logger = logging.getLogger("flappy")
    app_logger.setLevel(resolved_level)
    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
