"""Requester end of the WebSocket peer link (reconnecting client)."""

from __future__ import annotations

import asyncio
import logging
import contextlib

import websockets
from websockets.exceptions import WebSocketException

from notelink.config.link import RECONNECT_S, PAIRING_HEADER
from notelink.errors import TransportError, TRANSPORT_PEER_UNREACHABLE

from .framed import FramedLink
from .outbox import DurableOutbox
from .delegate import LinkDelegate

logger = logging.getLogger(__name__)


class WebSocketClientLink(FramedLink):
    def __init__(
        self,
        url: str,
        *,
        pairing_key: str = "",
        reconnect_s: float | None = None,
        outbox: DurableOutbox | None = None,
    ) -> None:
        super().__init__(outbox=outbox)
        self._url = url
        self._pairing_key = pairing_key
        self._reconnect_s = float(RECONNECT_S if reconnect_s is None else reconnect_s)
        self._ws: websockets.ClientConnection | None = None
        self._task: asyncio.Task | None = None
        self._stopping = False

    async def activate(self, delegate: LinkDelegate) -> None:
        await super().activate(delegate)
        if self._task is None:
            self._stopping = False
            self._task = asyncio.create_task(self._run())

    async def close(self) -> None:
        self._stopping = True
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        await super().close()

    async def _run(self) -> None:
        headers = [(PAIRING_HEADER, self._pairing_key)] if self._pairing_key else []
        while not self._stopping:
            try:
                async with websockets.connect(self._url, additional_headers=headers, max_size=None) as ws:
                    self._ws = ws
                    logger.info("connected to peer at %s", self._url)
                    await self._on_connected()
                    async for message in ws:
                        if isinstance(message, str):
                            await self._handle_text(message)
                        else:
                            self._handle_bytes(message)
            except (OSError, WebSocketException) as exc:
                logger.info("peer link down: %s", exc)
            finally:
                self._ws = None
                self._on_disconnected()
            if self._stopping:
                break
            await asyncio.sleep(self._reconnect_s)

    async def _write_text(self, text: str) -> None:
        await self._socket().send(text)

    async def _write_bytes(self, data: bytes) -> None:
        await self._socket().send(data)

    def _socket(self) -> websockets.ClientConnection:
        if self._ws is None:
            raise TransportError(TRANSPORT_PEER_UNREACHABLE)
        return self._ws


__all__ = ["WebSocketClientLink"]
