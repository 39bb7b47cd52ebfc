"""Periodic expiry of requests whose response never arrived."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from notelink.config.limits import PENDING_SWEEP_S, PENDING_TIMEOUT_S

from .requester import RequestingPeerService

logger = logging.getLogger(__name__)


class PendingWatchdog:
    """Resolves stale pending requests with the timeout error.

    Does nothing when the timeout is 0; pending requests then live until a
    response arrives.
    """

    def __init__(
        self,
        requester: RequestingPeerService,
        *,
        timeout_s: float | None = None,
        tick_s: float | None = None,
    ) -> None:
        self._requester = requester
        self._timeout_s = float(PENDING_TIMEOUT_S if timeout_s is None else timeout_s)
        self._tick_s = float(PENDING_SWEEP_S if tick_s is None else tick_s)
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def enabled(self) -> bool:
        return self._timeout_s > 0

    def start(self) -> asyncio.Task | None:
        if not self.enabled:
            return None
        if self._task is None:
            self._stop_event.clear()
            self._task = asyncio.create_task(self._loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    def sweep(self) -> int:
        return len(self._requester.expire_stale(self._timeout_s))

    async def _loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._tick_s)
                if self._stop_event.is_set():
                    break
                self.sweep()
        except asyncio.CancelledError:
            return
        except Exception:
            logger.exception("pending watchdog exiting due to unexpected error")


__all__ = ["PendingWatchdog"]
