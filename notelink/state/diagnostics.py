"""Responder diagnostics counters (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ResponderDiagnostics:
    inflight: int = 0
    accepted: int = 0
    duplicates: int = 0
    rejected_busy: int = 0
    engine_failures: int = 0
    last_request_at: float | None = None


__all__ = ["ResponderDiagnostics"]
