"""Requester-side request records (dataclasses only)."""

from __future__ import annotations

import asyncio
from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class RequestOutcome:
    """Terminal result of one request, delivered exactly once per request id."""

    request_id: str
    kind: str
    success: bool
    result: str | None = None
    error: str | None = None
    subject_id: str | None = None
    completed_at: float = 0.0


@dataclass(slots=True)
class PendingRequest:
    request_id: str
    kind: str
    submitted_at: float
    subject_id: str | None = None
    completion: asyncio.Future[RequestOutcome] | None = field(default=None, repr=False, compare=False)


__all__ = ["PendingRequest", "RequestOutcome"]
