"""Capability status broadcast on activation and on reachability regained."""

from __future__ import annotations

import logging

from notelink.errors import TransportError
from notelink.engines.summarizer import Summarizer
from notelink.state.connection import CapabilityStatus
from notelink.transport.adapter import TransportAdapter
from notelink.protocol.messages import Envelope, StatusUpdate

logger = logging.getLogger(__name__)

STATE_DISCONNECTED = "disconnected"
STATE_CONNECTED_UNKNOWN = "connected_unknown_status"
STATE_CONNECTED_BROADCASTED = "connected_broadcasted"


class AvailabilityBroadcaster:
    """Tells the requesting peer whether summaries can be produced.

    Availability is re-read from the summarizer before every broadcast.
    Status updates go out on the transient channel only; a failed send is
    logged and retried at the next reachability transition.
    """

    def __init__(self, adapter: TransportAdapter, *, summarizer: Summarizer) -> None:
        self._adapter = adapter
        self._summarizer = summarizer
        self._state = STATE_DISCONNECTED
        self._last_status: CapabilityStatus | None = None

    @property
    def state(self) -> str:
        return self._state

    @property
    def last_status(self) -> CapabilityStatus | None:
        return self._last_status

    async def handle_activation(self, succeeded: bool) -> None:
        if not succeeded or not self._adapter.reachable:
            self._state = STATE_DISCONNECTED
            return
        self._state = STATE_CONNECTED_UNKNOWN
        await self.broadcast()

    async def handle_reachability(self, reachable: bool) -> None:
        if not reachable:
            self._state = STATE_DISCONNECTED
            return
        if self._state != STATE_DISCONNECTED:
            return
        self._state = STATE_CONNECTED_UNKNOWN
        await self.broadcast()

    async def broadcast(self) -> bool:
        status = self._summarizer.check_availability()
        update = StatusUpdate(capability_available=status.capability_available, status_text=status.status_text)
        try:
            await self._adapter.send_transient(Envelope.wrap(update))
        except TransportError as exc:
            logger.warning("status broadcast failed: %s", exc)
            return False
        self._state = STATE_CONNECTED_BROADCASTED
        self._last_status = status
        logger.info("broadcast status: available=%s (%s)", status.capability_available, status.status_text)
        return True


__all__ = [
    "AvailabilityBroadcaster",
    "STATE_CONNECTED_BROADCASTED",
    "STATE_CONNECTED_UNKNOWN",
    "STATE_DISCONNECTED",
]
