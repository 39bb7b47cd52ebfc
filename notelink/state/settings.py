"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    pairing_key: str


@dataclass(frozen=True, slots=True)
class ProtocolSettings:
    min_summary_chars: int
    transient_max_bytes: int
    max_audio_bytes: int


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    pending_timeout_s: float
    pending_sweep_s: float
    max_inflight_requests: int
    completed_ttl_s: float
    inbound_queue_max: int


@dataclass(frozen=True, slots=True)
class LinkSettings:
    ws_path: str
    reconnect_s: float
    outbox_path: Path | None


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    protocol: ProtocolSettings
    limits: LimitsSettings
    link: LinkSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "LimitsSettings",
    "LinkSettings",
    "ProtocolSettings",
]
