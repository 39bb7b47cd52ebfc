"""Logging initialization."""

from __future__ import annotations

import logging

from notelink.config.logging import LOG_LEVEL, LOG_FORMAT, QUIET_LOGGERS, SHOW_LINK_LOGS


def configure_logging(*, show_link_logs: bool = SHOW_LINK_LOGS) -> None:
    # websockets logs every frame at DEBUG. Keep it tame unless explicitly enabled.
    if not show_link_logs:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
