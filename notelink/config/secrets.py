"""Secrets and pairing configuration."""

from __future__ import annotations

import os

ENV_PAIRING_KEY = "NOTELINK_PAIRING_KEY"


def get_pairing_key() -> str:
    return (os.getenv(ENV_PAIRING_KEY) or "").strip()


__all__ = ["ENV_PAIRING_KEY", "get_pairing_key"]
