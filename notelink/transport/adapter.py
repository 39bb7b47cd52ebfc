"""Transport adapter: delivery primitives and an inbound event queue over a peer link."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from notelink.protocol.codec import MessageCodec
from notelink.protocol.messages import Envelope
from notelink.config.limits import INBOUND_QUEUE_MAX, TRANSIENT_MAX_BYTES
from notelink.errors import (
    DecodeError,
    TransportError,
    TRANSPORT_PEER_UNREACHABLE,
    TRANSPORT_PAYLOAD_TOO_LARGE,
)

from .link import PeerLink
from .files import stage_file
from .events import (
    CHANNEL_DURABLE,
    CHANNEL_TRANSIENT,
    CHANNEL_LARGE_PAYLOAD,
    LinkEvent,
    PairingChanged,
    EnvelopeReceived,
    ReachabilityChanged,
    ActivationCompleted,
)

logger = logging.getLogger(__name__)


class TransportAdapter:
    """Owns the process-wide link handle; the only component that sends.

    Inbound link callbacks are decoded synchronously and queued as
    ``LinkEvent`` objects for a single consumer to apply in order.
    """

    def __init__(
        self,
        link: PeerLink,
        *,
        codec: MessageCodec | None = None,
        transient_max_bytes: int = TRANSIENT_MAX_BYTES,
        inbound_queue_max: int = INBOUND_QUEUE_MAX,
    ) -> None:
        self._link = link
        self._codec = codec or MessageCodec()
        self._transient_max_bytes = int(transient_max_bytes)
        self._events: asyncio.Queue[LinkEvent] = asyncio.Queue(maxsize=max(1, int(inbound_queue_max)))
        self._activated = False

    @property
    def codec(self) -> MessageCodec:
        return self._codec

    @property
    def activated(self) -> bool:
        return self._activated

    @property
    def reachable(self) -> bool:
        return self._link.reachable

    @property
    def paired(self) -> bool:
        return self._link.paired

    @property
    def app_installed(self) -> bool:
        return self._link.app_installed

    async def activate(self) -> None:
        await self._link.activate(self)

    async def close(self) -> None:
        await self._link.close()

    def fits_transient(self, data: bytes) -> bool:
        return len(data) <= self._transient_max_bytes

    # ---- outbound ----

    async def send_transient(self, envelope: Envelope) -> None:
        await self._send_transient_bytes(self._codec.encode(envelope))

    async def send_durable(self, envelope: Envelope) -> None:
        await self._link.transfer_user_info(self._codec.encode(envelope))

    async def send_large_payload(self, envelope: Envelope) -> None:
        await self._send_file_bytes(self._codec.encode(envelope))

    async def send(self, envelope: Envelope) -> str:
        """Transient send with size-based fallback to the large-payload channel.

        Returns the channel used.
        """
        data = self._codec.encode(envelope)
        if self.fits_transient(data):
            await self._send_transient_bytes(data)
            return CHANNEL_TRANSIENT
        logger.debug("%s envelope is %s bytes; using large-payload channel", envelope.kind, len(data))
        await self._send_file_bytes(data)
        return CHANNEL_LARGE_PAYLOAD

    async def send_response(self, envelope: Envelope) -> None:
        """Durable send always, plus a transient attempt while the peer is reachable.

        Both copies may arrive; receivers correlate by request id.
        """
        data = self._codec.encode(envelope)
        await self._link.transfer_user_info(data)
        if not self._link.reachable or not self.fits_transient(data):
            return
        try:
            await self._link.send_message(data)
        except TransportError as exc:
            logger.debug("opportunistic transient send for %s failed: %s", envelope.request_id, exc)

    async def _send_transient_bytes(self, data: bytes) -> None:
        if not self.fits_transient(data):
            raise TransportError(
                TRANSPORT_PAYLOAD_TOO_LARGE,
                f"{len(data)} bytes exceeds transient ceiling of {self._transient_max_bytes}",
            )
        if not self._link.reachable:
            raise TransportError(TRANSPORT_PEER_UNREACHABLE)
        await self._link.send_message(data)

    async def _send_file_bytes(self, data: bytes) -> None:
        path = stage_file(data)
        try:
            await self._link.transfer_file(path)
        finally:
            path.unlink(missing_ok=True)

    # ---- inbound ----

    async def next_event(self) -> LinkEvent:
        return await self._events.get()

    def pending_events(self) -> int:
        return self._events.qsize()

    def on_activation(self, error: str | None) -> None:
        self._activated = error is None
        if error is not None:
            logger.warning("link activation failed: %s", error)
        self._push(ActivationCompleted(error=error))

    def on_message(self, data: bytes) -> None:
        self._push_envelope(data, CHANNEL_TRANSIENT)

    def on_user_info(self, data: bytes) -> None:
        self._push_envelope(data, CHANNEL_DURABLE)

    def on_file(self, path: Path) -> None:
        # The link deletes the file once this returns; copy the body now.
        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.warning("large payload at %s could not be read: %s", path, exc)
            return
        self._push_envelope(data, CHANNEL_LARGE_PAYLOAD)

    def on_reachability_changed(self, reachable: bool) -> None:
        logger.info("peer reachability changed: reachable=%s", reachable)
        self._push(ReachabilityChanged(reachable=reachable))

    def on_pairing_changed(self, paired: bool, app_installed: bool) -> None:
        logger.info("peer pairing changed: paired=%s app_installed=%s", paired, app_installed)
        self._push(PairingChanged(paired=paired, app_installed=app_installed))

    def _push_envelope(self, data: bytes, channel: str) -> None:
        try:
            envelope = self._codec.decode(data)
        except DecodeError as exc:
            logger.warning("dropping undecodable %s message: %s", channel, exc)
            return
        self._push(EnvelopeReceived(envelope=envelope, channel=channel))

    def _push(self, event: LinkEvent) -> None:
        try:
            self._events.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning("inbound event queue full; dropping %s", type(event).__name__)


__all__ = ["TransportAdapter"]
