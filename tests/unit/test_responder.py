from __future__ import annotations

import asyncio

import pytest

from notelink.transport.adapter import TransportAdapter
from notelink.transport.loopback import LoopbackLink
from notelink.handlers.responder import RespondingPeerService
from notelink.errors import RecognitionError, SummarizationError
from notelink.protocol.messages import (
    Envelope,
    StatusUpdate,
    SummarizeRequest,
    TranscribeRequest,
)

from utils.engines import FakeSummarizer, FakeTranscriber
from utils.peers import LONG_NOTE, next_envelope


async def _responder(*, summarizer=None, transcriber=None, max_inflight: int = 0, completed_ttl_s: float = 30.0):
    a, b = LoopbackLink.pair()
    requester_side = TransportAdapter(a)
    adapter = TransportAdapter(b)
    await requester_side.activate()
    await adapter.activate()
    service = RespondingPeerService(
        adapter,
        summarizer=summarizer or FakeSummarizer(),
        transcriber=transcriber or FakeTranscriber(),
        max_inflight=max_inflight,
        completed_ttl_s=completed_ttl_s,
    )
    return b, service, requester_side


def _summarize(rid: str = "r1") -> Envelope:
    return Envelope.wrap(SummarizeRequest(request_id=rid, content=LONG_NOTE, note_id="n1"))


@pytest.mark.asyncio
async def test_summarize_request_produces_engine_summary() -> None:
    link, service, requester_side = await _responder()

    task = service.handle_envelope(_summarize())
    assert task is not None
    await task
    received = await next_envelope(requester_side)

    payload = received.envelope.payload
    assert payload.request_id == "r1"
    assert payload.success is True
    assert payload.result == "A short summary."
    assert len(link.sent["user_info"]) == 1
    assert len(link.sent["message"]) == 1
    assert service.diagnostics.accepted == 1
    assert service.diagnostics.inflight == 0


@pytest.mark.asyncio
async def test_summary_text_is_forwarded_verbatim() -> None:
    _link, service, requester_side = await _responder(summarizer=FakeSummarizer(summary=" Engine text\n"))

    await service.handle_envelope(_summarize())
    received = await next_envelope(requester_side)

    assert received.envelope.payload.result == " Engine text\n"


@pytest.mark.asyncio
async def test_duplicate_while_in_flight_is_discarded() -> None:
    summarizer = FakeSummarizer()
    summarizer.gate = asyncio.Event()
    link, service, _requester_side = await _responder(summarizer=summarizer)

    first = service.handle_envelope(_summarize())
    await asyncio.sleep(0)
    second = service.handle_envelope(_summarize())

    assert first is not None
    assert second is None
    assert service.diagnostics.inflight == 1

    summarizer.gate.set()
    await service.drain()

    assert summarizer.calls == [LONG_NOTE]
    assert len(link.sent["user_info"]) == 1
    assert service.diagnostics.duplicates == 1


@pytest.mark.asyncio
async def test_late_duplicate_after_completion_is_absorbed() -> None:
    summarizer = FakeSummarizer()
    _link, service, _requester_side = await _responder(summarizer=summarizer)

    await service.handle_envelope(_summarize())

    assert service.handle_envelope(_summarize()) is None
    assert len(summarizer.calls) == 1


@pytest.mark.asyncio
async def test_completed_ids_are_reprocessed_when_cache_disabled() -> None:
    summarizer = FakeSummarizer()
    _link, service, _requester_side = await _responder(summarizer=summarizer, completed_ttl_s=0)

    await service.handle_envelope(_summarize())
    again = service.handle_envelope(_summarize())

    assert again is not None
    await again
    assert len(summarizer.calls) == 2


@pytest.mark.asyncio
async def test_summarization_error_becomes_negative_response() -> None:
    summarizer = FakeSummarizer(error=SummarizationError("generationFailed", "Failed to generate summary: model busy"))
    _link, service, requester_side = await _responder(summarizer=summarizer)

    await service.handle_envelope(_summarize())
    received = await next_envelope(requester_side)

    assert received.envelope.payload.success is False
    assert received.envelope.payload.error == "Failed to generate summary: model busy"
    assert service.diagnostics.engine_failures == 1


@pytest.mark.asyncio
async def test_unexpected_engine_exception_becomes_internal_error() -> None:
    summarizer = FakeSummarizer(error=RuntimeError("boom"))
    _link, service, requester_side = await _responder(summarizer=summarizer)

    await service.handle_envelope(_summarize())
    received = await next_envelope(requester_side)

    assert received.envelope.payload.error == "internalError"
    assert service.diagnostics.inflight == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("transcriber", "error"),
    [
        (FakeTranscriber(text="   "), "emptyResult"),
        (FakeTranscriber(error=RecognitionError("notAuthorized", "Speech recognition not authorized")), "notAuthorized"),
        (FakeTranscriber(error=RecognitionError("noResult")), "noResult"),
    ],
)
async def test_transcription_failures_carry_recognition_code(transcriber: FakeTranscriber, error: str) -> None:
    _link, service, requester_side = await _responder(transcriber=transcriber)

    await service.handle_envelope(Envelope.wrap(TranscribeRequest(request_id="t1", audio_bytes=b"\x00\x01")))
    received = await next_envelope(requester_side)

    assert received.envelope.payload.success is False
    assert received.envelope.payload.error == error


@pytest.mark.asyncio
async def test_transcription_success() -> None:
    transcriber = FakeTranscriber(text=" remember the milk ")
    _link, service, requester_side = await _responder(transcriber=transcriber)

    await service.handle_envelope(Envelope.wrap(TranscribeRequest(request_id="t1", audio_bytes=b"\x07" * 10)))
    received = await next_envelope(requester_side)

    assert received.envelope.payload.result == " remember the milk "
    assert transcriber.calls == [b"\x07" * 10]


@pytest.mark.asyncio
async def test_concurrency_ceiling_answers_busy() -> None:
    summarizer = FakeSummarizer()
    summarizer.gate = asyncio.Event()
    _link, service, requester_side = await _responder(summarizer=summarizer, max_inflight=1)

    service.handle_envelope(_summarize("r1"))
    await asyncio.sleep(0)
    busy = service.handle_envelope(_summarize("r2"))
    assert busy is not None
    await busy
    received = await next_envelope(requester_side)

    assert received.envelope.request_id == "r2"
    assert received.envelope.payload.error == "responderBusy"
    assert service.diagnostics.rejected_busy == 1

    summarizer.gate.set()
    await service.drain()
    assert summarizer.calls == [LONG_NOTE]


@pytest.mark.asyncio
async def test_non_request_envelopes_are_ignored() -> None:
    _link, service, _requester_side = await _responder()
    assert service.handle_envelope(Envelope.wrap(StatusUpdate(capability_available=True, status_text="Ready"))) is None
    assert service.diagnostics.accepted == 0
