from __future__ import annotations

import pytest

from notelink.transport.adapter import TransportAdapter
from notelink.transport.loopback import LoopbackLink
from notelink.handlers.broadcaster import (
    STATE_DISCONNECTED,
    AvailabilityBroadcaster,
    STATE_CONNECTED_BROADCASTED,
)
from notelink.protocol.messages import StatusUpdate

from utils.engines import FakeSummarizer
from utils.peers import next_envelope


async def _broadcaster(*, reachable: bool = True, summarizer: FakeSummarizer | None = None):
    a, b = LoopbackLink.pair(reachable=reachable)
    listener = TransportAdapter(a)
    adapter = TransportAdapter(b)
    await listener.activate()
    await adapter.activate()
    summarizer = summarizer or FakeSummarizer()
    return b, AvailabilityBroadcaster(adapter, summarizer=summarizer), listener, summarizer


@pytest.mark.asyncio
async def test_activation_while_reachable_broadcasts() -> None:
    link, broadcaster, listener, _summarizer = await _broadcaster()

    await broadcaster.handle_activation(True)
    received = await next_envelope(listener)

    assert received.envelope.payload == StatusUpdate(capability_available=True, status_text="Ready")
    assert broadcaster.state == STATE_CONNECTED_BROADCASTED
    assert link.sent["user_info"] == []


@pytest.mark.asyncio
async def test_activation_while_unreachable_stays_disconnected() -> None:
    link, broadcaster, _listener, _summarizer = await _broadcaster(reachable=False)

    await broadcaster.handle_activation(True)

    assert broadcaster.state == STATE_DISCONNECTED
    assert link.sent["message"] == []


@pytest.mark.asyncio
async def test_failed_activation_does_not_broadcast() -> None:
    link, broadcaster, _listener, _summarizer = await _broadcaster()

    await broadcaster.handle_activation(False)

    assert broadcaster.state == STATE_DISCONNECTED
    assert link.sent["message"] == []


@pytest.mark.asyncio
async def test_reachability_regained_rebroadcasts_fresh_status() -> None:
    link, broadcaster, listener, summarizer = await _broadcaster()
    await broadcaster.handle_activation(True)
    await next_envelope(listener)

    await link.set_reachable(False)
    await broadcaster.handle_reachability(False)
    summarizer.available = False
    summarizer.status_text = "Apple Intelligence not enabled"
    await link.set_reachable(True)
    await broadcaster.handle_reachability(True)
    received = await next_envelope(listener)

    assert received.envelope.payload == StatusUpdate(
        capability_available=False,
        status_text="Apple Intelligence not enabled",
    )
    assert broadcaster.last_status is not None
    assert broadcaster.last_status.capability_available is False


@pytest.mark.asyncio
async def test_repeated_reachable_signal_does_not_rebroadcast() -> None:
    link, broadcaster, _listener, _summarizer = await _broadcaster()
    await broadcaster.handle_activation(True)

    await broadcaster.handle_reachability(True)

    assert len(link.sent["message"]) == 1


@pytest.mark.asyncio
async def test_failed_broadcast_is_not_fatal() -> None:
    link, broadcaster, _listener, _summarizer = await _broadcaster()
    link.fail_sends = True

    await broadcaster.handle_activation(True)

    assert broadcaster.state != STATE_CONNECTED_BROADCASTED
    assert broadcaster.last_status is None
