"""Logging setup shared by scripts and embedding applications."""

from __future__ import annotations

import logging

from timeline_segments.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging.

    Args:
        level: Logging level name or number.  Falls back to
               ``settings.log_level`` (``SEGMENTS_LOG_LEVEL``).
    """
    logging.basicConfig(
        level=level if level is not None else settings.log_level,
        format=LOG_FORMAT,
    )
