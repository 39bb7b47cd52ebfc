"""Requester-side correlation: request id -> pending record."""

from __future__ import annotations

import time
import asyncio
import logging
from collections.abc import Callable

from notelink.state.pending import PendingRequest, RequestOutcome

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class PendingRequestTracker:
    """Tracks requests awaiting a response.

    Each registered id completes at most once: ``resolve`` removes the record
    before completing it, so a second response for the same id is a no-op.
    """

    def __init__(self, *, now_fn: TimeFn | None = None) -> None:
        self._now = now_fn or time.time
        self._pending: dict[str, PendingRequest] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def register(self, request_id: str, kind: str, *, subject_id: str | None = None) -> PendingRequest:
        if request_id in self._pending:
            raise ValueError(f"request id already pending: {request_id}")
        pending = PendingRequest(
            request_id=request_id,
            kind=kind,
            submitted_at=self._now(),
            subject_id=subject_id,
            completion=asyncio.get_running_loop().create_future(),
        )
        self._pending[request_id] = pending
        return pending

    def resolve(
        self,
        request_id: str,
        *,
        success: bool,
        result: str | None = None,
        error: str | None = None,
    ) -> RequestOutcome | None:
        """Complete a pending request; returns None for an unknown id."""
        pending = self._pending.pop(request_id, None)
        if pending is None:
            logger.debug("ignoring completion for unknown request %s", request_id)
            return None
        outcome = RequestOutcome(
            request_id=request_id,
            kind=pending.kind,
            success=success,
            result=result if success else None,
            error=None if success else error,
            subject_id=pending.subject_id,
            completed_at=self._now(),
        )
        if pending.completion is not None and not pending.completion.done():
            pending.completion.set_result(outcome)
        return outcome

    def resolve_result(self, request_id: str, result: str) -> RequestOutcome | None:
        return self.resolve(request_id, success=True, result=result)

    def resolve_error(self, request_id: str, error: str) -> RequestOutcome | None:
        return self.resolve(request_id, success=False, error=error)

    def is_pending(self, request_id: str) -> bool:
        return request_id in self._pending

    def get(self, request_id: str) -> PendingRequest | None:
        return self._pending.get(request_id)

    def pending_ids(self) -> list[str]:
        return list(self._pending)

    def has_subject(self, subject_id: str) -> bool:
        return any(p.subject_id == subject_id for p in self._pending.values())

    def expired(self, lifetime_s: float) -> list[str]:
        """Ids submitted more than ``lifetime_s`` ago (empty when disabled)."""
        if lifetime_s <= 0:
            return []
        cutoff = self._now() - lifetime_s
        return [rid for rid, p in self._pending.items() if p.submitted_at <= cutoff]


__all__ = ["PendingRequestTracker"]
