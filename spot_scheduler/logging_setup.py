"""
Loguru sink configuration.

The library only emits through ``loguru.logger``; applications call
``configure_logging`` once at startup to choose the level and format.
"""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {name} | {message}"


def configure_logging(level: str | None = None, sink=None) -> int:
    """
    Replace existing loguru sinks with a single formatted sink.

    Args:
        level: Log level (defaults to settings.log_level)
        sink: Target sink (defaults to stderr)

    Returns:
        The loguru handler id
    """
    if level is None:
        from spot_scheduler.config import get_settings

        level = get_settings().log_level

    logger.remove()
    return logger.add(sink or sys.stderr, level=level.upper(), format=LOG_FORMAT)
