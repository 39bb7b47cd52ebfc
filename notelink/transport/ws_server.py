"""Responder end of the WebSocket peer link, driven by the fastapi endpoint."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket, WebSocketDisconnect

from notelink.errors import TransportError, TRANSPORT_PEER_UNREACHABLE
from notelink.config.link import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_REPLACED_CODE,
    WS_CLOSE_REPLACED_REASON,
)

from .framed import FramedLink
from .outbox import DurableOutbox

logger = logging.getLogger(__name__)


class WebSocketServerLink(FramedLink):
    """The peer is reachable while an accepted, paired socket is being served.

    A newer connection replaces the current one.
    """

    def __init__(self, *, outbox: DurableOutbox | None = None) -> None:
        super().__init__(outbox=outbox)
        self._ws: WebSocket | None = None

    async def serve(self, ws: WebSocket) -> None:
        """Run the receive loop for an accepted socket until it disconnects."""
        previous = self._ws
        self._ws = ws
        if previous is not None:
            logger.info("peer reconnected; replacing previous socket")
            with contextlib.suppress(Exception):
                await previous.close(code=WS_CLOSE_REPLACED_CODE, reason=WS_CLOSE_REPLACED_REASON)
        try:
            await self._on_connected()
            while True:
                message = await ws.receive()
                if message["type"] == "websocket.disconnect":
                    break
                if message.get("text") is not None:
                    await self._handle_text(message["text"])
                elif message.get("bytes") is not None:
                    self._handle_bytes(message["bytes"])
        except WebSocketDisconnect:
            pass
        finally:
            if self._ws is ws:
                self._ws = None
                self._on_disconnected()

    async def close(self) -> None:
        ws = self._ws
        self._ws = None
        if ws is not None:
            with contextlib.suppress(Exception):
                await ws.close(code=WS_CLOSE_NORMAL_CODE)
        self._on_disconnected()
        await super().close()

    async def _write_text(self, text: str) -> None:
        await self._socket().send_text(text)

    async def _write_bytes(self, data: bytes) -> None:
        await self._socket().send_bytes(data)

    def _socket(self) -> WebSocket:
        if self._ws is None:
            raise TransportError(TRANSPORT_PEER_UNREACHABLE)
        return self._ws


__all__ = ["WebSocketServerLink"]
