from __future__ import annotations

from pathlib import Path

import pytest

from notelink.errors import TransportError, TRANSPORT_PEER_UNREACHABLE
from notelink.transport.outbox import DurableOutbox


class _Sink:
    def __init__(self, fail_after: int | None = None) -> None:
        self.fail_after = fail_after
        self.delivered: list[bytes] = []

    async def __call__(self, data: bytes) -> None:
        if self.fail_after is not None and len(self.delivered) >= self.fail_after:
            raise TransportError(TRANSPORT_PEER_UNREACHABLE)
        self.delivered.append(data)


@pytest.mark.asyncio
async def test_flush_delivers_in_order() -> None:
    outbox = DurableOutbox()
    for item in (b"1", b"2", b"3"):
        outbox.enqueue(item)
    sink = _Sink()

    assert await outbox.flush(sink) == 3
    assert sink.delivered == [b"1", b"2", b"3"]
    assert len(outbox) == 0


@pytest.mark.asyncio
async def test_flush_stops_at_first_failure_and_keeps_the_rest() -> None:
    outbox = DurableOutbox()
    for item in (b"1", b"2", b"3"):
        outbox.enqueue(item)

    assert await outbox.flush(_Sink(fail_after=1)) == 1
    assert len(outbox) == 2

    sink = _Sink()
    await outbox.flush(sink)
    assert sink.delivered == [b"2", b"3"]


@pytest.mark.asyncio
async def test_persisted_outbox_survives_restart(tmp_path: Path) -> None:
    path = tmp_path / "outbox.jsonl"
    first = DurableOutbox(path=path)
    first.enqueue(b'{"kind":"a"}')
    first.enqueue(b'{"kind":"b"}')
    await first.flush(_Sink(fail_after=1))

    restored = DurableOutbox(path=path)
    sink = _Sink()
    await restored.flush(sink)

    assert sink.delivered == [b'{"kind":"b"}']
    assert path.read_bytes() == b""


def test_persisted_outbox_skips_unreadable_lines(tmp_path: Path) -> None:
    path = tmp_path / "outbox.jsonl"
    path.write_bytes(b'garbage\n{"data":"eA=="}\n')

    assert len(DurableOutbox(path=path)) == 1
