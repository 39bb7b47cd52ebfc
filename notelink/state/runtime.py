"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from notelink.state.settings import AppSettings
    from notelink.handlers.actor import PeerActor
    from notelink.handlers.watchdog import PendingWatchdog
    from notelink.handlers.requester import RequestingPeerService
    from notelink.handlers.responder import RespondingPeerService
    from notelink.handlers.broadcaster import AvailabilityBroadcaster
    from notelink.transport.adapter import TransportAdapter

ROLE_REQUESTER = "requester"
ROLE_RESPONDER = "responder"


@dataclass(slots=True)
class PeerRuntime:
    """Everything one peer needs, wired together; one role per process."""

    role: str
    adapter: TransportAdapter
    actor: PeerActor
    settings: AppSettings
    requester: RequestingPeerService | None = None
    responder: RespondingPeerService | None = None
    broadcaster: AvailabilityBroadcaster | None = None
    watchdog: PendingWatchdog | None = None

    async def start(self) -> None:
        self.actor.start()
        if self.watchdog is not None:
            self.watchdog.start()
        await self.adapter.activate()
        logger.info("%s peer started", self.role)

    async def shutdown(self) -> None:
        try:
            if self.watchdog is not None:
                await self.watchdog.stop()
            if self.responder is not None:
                await self.responder.drain()
            await self.actor.stop()
            await self.adapter.close()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["PeerRuntime", "ROLE_REQUESTER", "ROLE_RESPONDER"]
