"""Logging configuration."""

from __future__ import annotations

from ._env import get_str, get_bool

LOG_LEVEL = get_str("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Link libraries are chatty at DEBUG; keep them quiet unless asked.
SHOW_LINK_LOGS = get_bool("SHOW_LINK_LOGS", False)
QUIET_LOGGERS = ("websockets", "uvicorn.access")

__all__ = ["LOG_FORMAT", "LOG_LEVEL", "QUIET_LOGGERS", "SHOW_LINK_LOGS"]
