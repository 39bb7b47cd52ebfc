"""Short memory of completed request ids, to absorb late duplicates."""

from __future__ import annotations

import time
import collections
from collections.abc import Callable

TimeFn = Callable[[], float]


class CompletedRequestCache:
    """Remember ids for ``ttl_seconds`` after their response was produced.

    Disabled if ttl_seconds <= 0.
    """

    def __init__(self, *, ttl_seconds: float, now_fn: TimeFn | None = None) -> None:
        self.ttl_seconds = max(0.0, float(ttl_seconds))
        self._now = now_fn or time.monotonic
        self._order: collections.deque[tuple[float, str]] = collections.deque()
        self._ids: dict[str, float] = {}

    def add(self, request_id: str) -> None:
        if self.ttl_seconds <= 0:
            return
        now = self._now()
        self._evict(now)
        self._ids[request_id] = now
        self._order.append((now, request_id))

    def __contains__(self, request_id: object) -> bool:
        if self.ttl_seconds <= 0:
            return False
        self._evict(self._now())
        return request_id in self._ids

    def __len__(self) -> int:
        self._evict(self._now())
        return len(self._ids)

    def _evict(self, now: float) -> None:
        cutoff = now - self.ttl_seconds
        order = self._order
        while order and order[0][0] <= cutoff:
            at, request_id = order.popleft()
            # A re-added id keeps its newer timestamp.
            if self._ids.get(request_id) == at:
                del self._ids[request_id]


__all__ = ["CompletedRequestCache"]
