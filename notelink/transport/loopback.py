"""In-process peer link pair, used as the simulated transport."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from collections.abc import Callable

from notelink.errors import TransportError, TRANSPORT_SEND_FAILED, TRANSPORT_PEER_UNREACHABLE

from .outbox import DurableOutbox
from .files import deliver_file
from .delegate import LinkDelegate

logger = logging.getLogger(__name__)


class LoopbackLink:
    """One end of a connected pair created by ``LoopbackLink.pair()``.

    Reachability is symmetric and toggled with ``set_reachable``. Deliveries
    are scheduled on the running loop, so a send returns before the peer sees
    the data. ``sent`` records every payload handed to the link per channel.
    """

    def __init__(self, name: str, *, reachable: bool = True, paired: bool = True, app_installed: bool = True) -> None:
        self.name = name
        self._peer: LoopbackLink | None = None
        self._delegate: LinkDelegate | None = None
        self._reachable = reachable
        self._paired = paired
        self._app_installed = app_installed
        self._outbox = DurableOutbox()
        self.fail_sends = False
        self.sent: dict[str, list[bytes]] = {"message": [], "user_info": [], "file": []}

    @classmethod
    def pair(cls, *, reachable: bool = True) -> tuple[LoopbackLink, LoopbackLink]:
        a = cls("a", reachable=reachable)
        b = cls("b", reachable=reachable)
        a._peer = b
        b._peer = a
        return a, b

    @property
    def reachable(self) -> bool:
        return self._reachable

    @property
    def paired(self) -> bool:
        return self._paired

    @property
    def app_installed(self) -> bool:
        return self._app_installed

    @property
    def queued_user_info(self) -> int:
        return len(self._outbox)

    async def activate(self, delegate: LinkDelegate) -> None:
        self._delegate = delegate
        asyncio.get_running_loop().call_soon(delegate.on_activation, None)
        if self._reachable:
            await self._flush_outbox()
            if self._peer is not None:
                await self._peer._flush_outbox()

    async def close(self) -> None:
        self._delegate = None

    async def send_message(self, data: bytes) -> None:
        self._check_sendable()
        self.sent["message"].append(data)
        self._schedule(lambda d: d.on_message(data))

    async def transfer_user_info(self, data: bytes) -> None:
        self.sent["user_info"].append(data)
        self._outbox.enqueue(data)
        if self._reachable:
            await self._flush_outbox()

    async def transfer_file(self, path: Path) -> None:
        self._check_sendable()
        data = path.read_bytes()
        self.sent["file"].append(data)
        self._schedule(lambda d: deliver_file(data, d.on_file))

    async def set_reachable(self, reachable: bool) -> None:
        """Flip reachability for both ends and notify both delegates."""
        for end in (self, self._peer):
            if end is None or end._reachable == reachable:
                continue
            end._reachable = reachable
            if end._delegate is not None:
                asyncio.get_running_loop().call_soon(end._delegate.on_reachability_changed, reachable)
        if reachable:
            await self._flush_outbox()
            if self._peer is not None:
                await self._peer._flush_outbox()

    def set_pairing(self, *, paired: bool, app_installed: bool) -> None:
        self._paired = paired
        self._app_installed = app_installed
        if self._delegate is not None:
            asyncio.get_running_loop().call_soon(self._delegate.on_pairing_changed, paired, app_installed)

    def _check_sendable(self) -> None:
        if self.fail_sends:
            raise TransportError(TRANSPORT_SEND_FAILED, f"link {self.name} refused the send")
        if not self._reachable or self._peer is None:
            raise TransportError(TRANSPORT_PEER_UNREACHABLE)

    def _schedule(self, deliver: Callable[[LinkDelegate], None]) -> None:
        peer = self._peer

        def _run() -> None:
            delegate = peer._delegate if peer is not None else None
            if delegate is None:
                logger.warning("loopback %s: peer not activated; dropping delivery", self.name)
                return
            deliver(delegate)

        asyncio.get_running_loop().call_soon(_run)

    async def _deliver_user_info(self, data: bytes) -> None:
        peer = self._peer
        if not self._reachable or peer is None or peer._delegate is None:
            raise TransportError(TRANSPORT_PEER_UNREACHABLE)
        self._schedule(lambda d: d.on_user_info(data))

    async def _flush_outbox(self) -> None:
        await self._outbox.flush(self._deliver_user_info)


__all__ = ["LoopbackLink"]
