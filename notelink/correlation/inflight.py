"""Responder-side correlation: the in-flight dedup set."""

from __future__ import annotations

import threading


class InFlightTracker:
    """Exactly-once local processing over an at-least-once transport.

    ``try_begin`` must be atomic against concurrent deliveries of one id, which
    can arrive on independent link callbacks, so it takes a lock even though
    everything else runs on the event loop.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active: set[str] = set()

    def try_begin(self, request_id: str) -> bool:
        with self._lock:
            if request_id in self._active:
                return False
            self._active.add(request_id)
            return True

    def end(self, request_id: str) -> None:
        with self._lock:
            self._active.discard(request_id)

    def is_in_flight(self, request_id: str) -> bool:
        with self._lock:
            return request_id in self._active

    @property
    def count(self) -> int:
        return len(self._active)


__all__ = ["InFlightTracker"]
