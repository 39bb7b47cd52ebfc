"""Configuration module exports (env-resolved constants only)."""

from .limits import (
    MIN_SUMMARY_CHARS,
    TRANSIENT_MAX_BYTES,
)

__all__ = [
    "MIN_SUMMARY_CHARS",
    "TRANSIENT_MAX_BYTES",
]
