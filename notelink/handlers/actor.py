"""Single consumer of transport events; routes envelopes to the peer services."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from notelink.protocol.messages import Envelope
from notelink.transport.adapter import TransportAdapter
from notelink.config.protocol import KIND_STATUS_UPDATE, REQUEST_KINDS, RESPONSE_KINDS
from notelink.transport.events import (
    LinkEvent,
    PairingChanged,
    EnvelopeReceived,
    ActivationCompleted,
    ReachabilityChanged,
)

from .requester import RequestingPeerService
from .responder import RespondingPeerService
from .broadcaster import AvailabilityBroadcaster

logger = logging.getLogger(__name__)

ROUTE_REQUESTER = "requester"
ROUTE_RESPONDER = "responder"

ROUTES: dict[str, str] = {
    **{kind: ROUTE_RESPONDER for kind in REQUEST_KINDS},
    **{kind: ROUTE_REQUESTER for kind in RESPONSE_KINDS},
    KIND_STATUS_UPDATE: ROUTE_REQUESTER,
}


class PeerActor:
    """Owns the event loop side of one peer.

    Events are applied one at a time, so service state is only touched from
    this task. Responder work runs in its own tasks and reports back through
    the transport.
    """

    def __init__(
        self,
        adapter: TransportAdapter,
        *,
        requester: RequestingPeerService | None = None,
        responder: RespondingPeerService | None = None,
        broadcaster: AvailabilityBroadcaster | None = None,
    ) -> None:
        self._adapter = adapter
        self._requester = requester
        self._responder = responder
        self._broadcaster = broadcaster
        self._task: asyncio.Task | None = None
        self._applying = False

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def run(self) -> None:
        while True:
            event = await self._adapter.next_event()
            self._applying = True
            try:
                await self.apply(event)
            except Exception:
                logger.exception("failed to apply %s", type(event).__name__)
            finally:
                self._applying = False

    async def settle(self) -> None:
        """Return once every queued event has been applied."""
        # Link callbacks are scheduled with call_soon; give them a few turns to land.
        quiet_turns = 0
        while quiet_turns < 3:
            await asyncio.sleep(0)
            if self._adapter.pending_events() or self._applying:
                quiet_turns = 0
            else:
                quiet_turns += 1

    async def apply(self, event: LinkEvent) -> None:
        if isinstance(event, EnvelopeReceived):
            self._route(event.envelope)
        elif isinstance(event, ActivationCompleted):
            if self._requester is not None:
                self._requester.handle_activation(event)
            if self._broadcaster is not None:
                await self._broadcaster.handle_activation(event.succeeded)
        elif isinstance(event, ReachabilityChanged):
            logger.info("peer reachable=%s", event.reachable)
            if self._requester is not None:
                self._requester.handle_reachability(event.reachable)
            if self._broadcaster is not None:
                await self._broadcaster.handle_reachability(event.reachable)
        elif isinstance(event, PairingChanged):
            if self._requester is not None:
                self._requester.handle_pairing(event.paired, event.app_installed)

    def _route(self, envelope: Envelope) -> None:
        route = ROUTES.get(envelope.kind)
        if route == ROUTE_RESPONDER and self._responder is not None:
            self._responder.handle_envelope(envelope)
        elif route == ROUTE_REQUESTER and self._requester is not None:
            self._requester.handle_envelope(envelope)
        else:
            logger.debug("no handler for %s on this peer", envelope.kind)


__all__ = ["PeerActor", "ROUTES"]
