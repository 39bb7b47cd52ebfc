"""Peer link behaviour shared by both ends of a WebSocket connection."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from notelink.config.link import CHANNEL_ACK, CHANNEL_MESSAGE, CHANNEL_USER_INFO
from notelink.errors import DecodeError, TransportError, TRANSPORT_SEND_FAILED, TRANSPORT_PEER_UNREACHABLE

from .outbox import DurableOutbox
from .files import deliver_file
from .delegate import LinkDelegate
from .frames import ACK_FRAME, parse_frame, encode_frame

logger = logging.getLogger(__name__)


class FramedLink:
    """Frame codec, durable outbox and delegate plumbing over one socket.

    Subclasses own the socket: they call ``_on_connected`` / ``_on_disconnected``
    around its lifetime, feed received frames to ``_handle_text`` /
    ``_handle_bytes`` and implement ``_write_text`` / ``_write_bytes``.
    """

    def __init__(self, *, outbox: DurableOutbox | None = None) -> None:
        self._delegate: LinkDelegate | None = None
        self._outbox = outbox or DurableOutbox()
        self._connected = False
        self._paired = False

    @property
    def reachable(self) -> bool:
        return self._connected

    @property
    def paired(self) -> bool:
        return self._paired

    @property
    def app_installed(self) -> bool:
        return self._paired

    @property
    def queued_user_info(self) -> int:
        return len(self._outbox)

    async def activate(self, delegate: LinkDelegate) -> None:
        self._delegate = delegate
        asyncio.get_running_loop().call_soon(delegate.on_activation, None)

    async def close(self) -> None:
        self._delegate = None

    async def send_message(self, data: bytes) -> None:
        self._require_connected()
        await self._write_frame(encode_frame(CHANNEL_MESSAGE, data))

    async def transfer_user_info(self, data: bytes) -> None:
        self._outbox.enqueue(data)
        if self._connected:
            await self._outbox.flush(self._send_user_info)

    async def transfer_file(self, path: Path) -> None:
        self._require_connected()
        data = path.read_bytes()
        try:
            await self._write_bytes(data)
        except TransportError:
            raise
        except Exception as exc:
            raise TransportError(TRANSPORT_SEND_FAILED, str(exc)) from exc

    # ---- socket lifetime ----

    async def _on_connected(self) -> None:
        if not self._connected:
            self._connected = True
            self._paired = True
            if self._delegate is not None:
                self._delegate.on_pairing_changed(True, True)
                self._delegate.on_reachability_changed(True)
        await self._outbox.flush(self._send_user_info)

    def _on_disconnected(self) -> None:
        if not self._connected:
            return
        self._connected = False
        if self._delegate is not None:
            self._delegate.on_reachability_changed(False)

    async def _handle_text(self, raw: str) -> None:
        try:
            channel, body = parse_frame(raw)
        except DecodeError as exc:
            logger.warning("dropping bad frame: %s", exc)
            return
        if channel == CHANNEL_ACK:
            return
        delegate = self._delegate
        if delegate is None:
            logger.warning("link not activated; dropping %s frame", channel)
            return
        if channel == CHANNEL_USER_INFO:
            delegate.on_user_info(body)
            return
        delegate.on_message(body)
        try:
            await self._write_frame(ACK_FRAME)
        except TransportError as exc:
            logger.debug("ack not sent: %s", exc)

    def _handle_bytes(self, data: bytes) -> None:
        delegate = self._delegate
        if delegate is None:
            logger.warning("link not activated; dropping file transfer")
            return
        deliver_file(data, delegate.on_file)

    # ---- writes ----

    def _require_connected(self) -> None:
        if not self._connected:
            raise TransportError(TRANSPORT_PEER_UNREACHABLE)

    async def _send_user_info(self, data: bytes) -> None:
        self._require_connected()
        await self._write_frame(encode_frame(CHANNEL_USER_INFO, data))

    async def _write_frame(self, text: str) -> None:
        try:
            await self._write_text(text)
        except TransportError:
            raise
        except Exception as exc:
            raise TransportError(TRANSPORT_SEND_FAILED, str(exc)) from exc

    async def _write_text(self, text: str) -> None:
        raise NotImplementedError

    async def _write_bytes(self, data: bytes) -> None:
        raise NotImplementedError


__all__ = ["FramedLink"]
