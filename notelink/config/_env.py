"""Defensive environment parsing shared by the config modules."""

from __future__ import annotations

import os

_DISABLED_VALUES = {"0", "none", "null", "disabled", "disable", "off", "false"}


def get_str(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip()
    return raw or default


def get_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return float(default)
    if raw.lower() in _DISABLED_VALUES:
        return 0.0
    try:
        return float(raw)
    except Exception:
        return float(default)


def get_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return int(default)
    if raw.lower() in _DISABLED_VALUES:
        return 0
    try:
        return int(raw)
    except Exception:
        return int(default)


def get_bool(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return bool(default)
    if raw in _DISABLED_VALUES:
        return False
    return raw in {"1", "true", "yes", "y", "on"}


__all__ = ["get_bool", "get_float", "get_int", "get_str"]
