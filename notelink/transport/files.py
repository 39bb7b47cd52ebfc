"""Temporary files backing the large-payload side channel."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from collections.abc import Callable

_PREFIX = "notelink-"
_SUFFIX = ".transfer"


def stage_file(data: bytes) -> Path:
    """Write an outbound body to a temporary file; the caller owns deletion."""
    fd, name = tempfile.mkstemp(prefix=_PREFIX, suffix=_SUFFIX)
    with os.fdopen(fd, "wb") as fh:
        fh.write(data)
    return Path(name)


def deliver_file(data: bytes, callback: Callable[[Path], None]) -> None:
    """Materialise an inbound body, hand it to ``callback``, then delete it.

    The file does not outlive the callback.
    """
    path = stage_file(data)
    try:
        callback(path)
    finally:
        path.unlink(missing_ok=True)


__all__ = ["deliver_file", "stage_file"]
