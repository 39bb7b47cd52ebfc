"""Durable send queue: holds payloads until the peer can take them."""

from __future__ import annotations

import base64
import asyncio
import logging
from pathlib import Path
from collections import deque
from collections.abc import Callable, Awaitable

import orjson

from notelink.errors import TransportError

logger = logging.getLogger(__name__)

SendFn = Callable[[bytes], Awaitable[None]]


class DurableOutbox:
    """FIFO of undelivered durable payloads.

    With ``path`` set the queue is mirrored to an orjson-lines file, so queued
    responses survive a restart of the sending process.
    """

    def __init__(self, *, path: Path | None = None) -> None:
        self._path = path
        self._items: deque[bytes] = deque()
        self._flush_lock = asyncio.Lock()
        if path is not None:
            self._items.extend(self._load(path))

    def __len__(self) -> int:
        return len(self._items)

    def enqueue(self, data: bytes) -> None:
        self._items.append(data)
        if self._path is not None:
            with self._path.open("ab") as fh:
                fh.write(self._dump_line(data))

    async def flush(self, send: SendFn) -> int:
        """Send queued payloads in order; stop at the first failure.

        Returns how many payloads were delivered.
        """
        delivered = 0
        async with self._flush_lock:
            while self._items:
                data = self._items[0]
                try:
                    await send(data)
                except TransportError as exc:
                    logger.info("outbox flush paused after %s item(s): %s", delivered, exc)
                    break
                self._items.popleft()
                delivered += 1
            if delivered and self._path is not None:
                self._rewrite()
        return delivered

    def _rewrite(self) -> None:
        assert self._path is not None
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_bytes(b"".join(self._dump_line(item) for item in self._items))
        tmp.replace(self._path)

    @staticmethod
    def _dump_line(data: bytes) -> bytes:
        return orjson.dumps({"data": base64.b64encode(data).decode("ascii")}) + b"\n"

    @staticmethod
    def _load(path: Path) -> list[bytes]:
        if not path.exists():
            return []
        items: list[bytes] = []
        for lineno, line in enumerate(path.read_bytes().splitlines(), start=1):
            if not line.strip():
                continue
            try:
                items.append(base64.b64decode(orjson.loads(line)["data"], validate=True))
            except Exception:
                logger.warning("outbox %s: skipping unreadable line %s", path, lineno)
        if items:
            logger.info("outbox %s: restored %s queued item(s)", path, len(items))
        return items


__all__ = ["DurableOutbox"]
