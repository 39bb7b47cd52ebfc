"""Two runtimes wired over a loopback link pair."""

from __future__ import annotations

import asyncio
from pathlib import Path
from dataclasses import field, dataclass
from collections.abc import Callable

from notelink.state.runtime import PeerRuntime
from notelink.protocol.messages import Envelope
from notelink.transport.adapter import TransportAdapter
from notelink.transport.events import EnvelopeReceived
from notelink.transport.loopback import LoopbackLink
from notelink.runtime.dependencies import build_requester_runtime, build_responder_runtime
from notelink.state.settings import (
    AppSettings,
    AuthSettings,
    LinkSettings,
    LimitsSettings,
    ProtocolSettings,
)

from .engines import FakeSummarizer, FakeTranscriber

LONG_NOTE = "Buy milk, call the plumber about the kitchen sink, and book flights for the spring trip."


def make_settings(
    *,
    min_summary_chars: int = 50,
    transient_max_bytes: int = 64 * 1024,
    max_audio_bytes: int = 1024 * 1024,
    pending_timeout_s: float = 0.0,
    pending_sweep_s: float = 0.01,
    max_inflight_requests: int = 0,
    completed_ttl_s: float = 30.0,
    outbox_path: Path | None = None,
) -> AppSettings:
    return AppSettings(
        auth=AuthSettings(pairing_key="test-key"),
        protocol=ProtocolSettings(
            min_summary_chars=min_summary_chars,
            transient_max_bytes=transient_max_bytes,
            max_audio_bytes=max_audio_bytes,
        ),
        limits=LimitsSettings(
            pending_timeout_s=pending_timeout_s,
            pending_sweep_s=pending_sweep_s,
            max_inflight_requests=max_inflight_requests,
            completed_ttl_s=completed_ttl_s,
            inbound_queue_max=64,
        ),
        link=LinkSettings(ws_path="/ws", reconnect_s=0.05, outbox_path=outbox_path),
    )


async def wait_until(predicate: Callable[[], bool], *, timeout: float = 1.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_poll(), timeout=timeout)


async def next_envelope(adapter: TransportAdapter, *, timeout: float = 1.0) -> EnvelopeReceived:
    """Skip link state events until an envelope arrives."""
    while True:
        event = await asyncio.wait_for(adapter.next_event(), timeout=timeout)
        if isinstance(event, EnvelopeReceived):
            return event


@dataclass(slots=True)
class PeerPair:
    requester_link: LoopbackLink
    responder_link: LoopbackLink
    requester: PeerRuntime
    responder: PeerRuntime
    summarizer: FakeSummarizer
    transcriber: FakeTranscriber
    outcomes: list = field(default_factory=list)

    async def settle(self) -> None:
        for _ in range(3):
            await self.responder.actor.settle()
            assert self.responder.responder is not None
            await self.responder.responder.drain()
            await self.requester.actor.settle()

    async def stop(self) -> None:
        await self.requester.shutdown()
        await self.responder.shutdown()


async def start_pair(
    *,
    reachable: bool = True,
    summarizer: FakeSummarizer | None = None,
    transcriber: FakeTranscriber | None = None,
    settings: AppSettings | None = None,
) -> PeerPair:
    settings = settings or make_settings()
    summarizer = summarizer or FakeSummarizer()
    transcriber = transcriber or FakeTranscriber()
    requester_link, responder_link = LoopbackLink.pair(reachable=reachable)
    pair = PeerPair(
        requester_link=requester_link,
        responder_link=responder_link,
        requester=build_requester_runtime(requester_link, settings=settings),
        responder=build_responder_runtime(
            responder_link,
            summarizer=summarizer,
            transcriber=transcriber,
            settings=settings,
        ),
        summarizer=summarizer,
        transcriber=transcriber,
    )
    assert pair.requester.requester is not None
    pair.requester.requester.subscribe(pair.outcomes.append)
    # The requester must be listening before the responder broadcasts its status.
    await pair.requester.start()
    await pair.responder.start()
    if reachable:
        await wait_until(lambda: pair.requester.requester.connection.status_text == summarizer.status_text)
    await pair.settle()
    return pair


__all__ = ["LONG_NOTE", "PeerPair", "make_settings", "next_envelope", "start_pair", "wait_until"]
