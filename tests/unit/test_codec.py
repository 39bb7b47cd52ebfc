from __future__ import annotations

import base64

import orjson
import pytest

from notelink.errors import DecodeError
from notelink.protocol.codec import MessageCodec
from notelink.protocol.messages import (
    Envelope,
    StatusUpdate,
    SummarizeRequest,
    SummarizeResponse,
    TranscribeRequest,
    TranscribeResponse,
)


def _wire(kind: str, payload: dict, timestamp: object = 1700000000.5) -> bytes:
    return orjson.dumps({"kind": kind, "timestamp": timestamp, "payload": payload})


def test_encode_uses_stable_field_names() -> None:
    codec = MessageCodec()
    env = Envelope.wrap(SummarizeRequest(request_id="r1", content="hello", note_id="n1"), timestamp=12.0)

    wire = orjson.loads(codec.encode(env))

    assert wire == {
        "kind": "summarize-request",
        "timestamp": 12.0,
        "payload": {"requestId": "r1", "content": "hello", "noteId": "n1"},
    }


def test_encode_transcribe_request_base64_encodes_audio() -> None:
    codec = MessageCodec()
    env = Envelope.wrap(TranscribeRequest(request_id="r2", audio_bytes=b"\x00\x01\xff"), timestamp=1.0)

    wire = orjson.loads(codec.encode(env))

    assert wire["payload"]["audioBytes"] == base64.b64encode(b"\x00\x01\xff").decode("ascii")


def test_decode_summarize_response_success() -> None:
    codec = MessageCodec()
    raw = _wire("summarize-response", {"requestId": "r1", "success": True, "result": "short", "generatedAt": 5})

    env = codec.decode(raw)

    assert env.kind == "summarize-response"
    assert env.request_id == "r1"
    assert env.payload == SummarizeResponse(request_id="r1", success=True, generated_at=5.0, result="short")


def test_decode_transcribe_response_failure_keeps_error_code() -> None:
    codec = MessageCodec()
    raw = _wire("transcribe-response", {"requestId": "r9", "success": False, "error": "emptyResult"})

    env = codec.decode(raw)

    assert env.payload == TranscribeResponse(request_id="r9", success=False, error="emptyResult")


def test_decode_status_update_and_accepts_str_input() -> None:
    codec = MessageCodec()
    raw = _wire("status-update", {"capabilityAvailable": False, "statusText": "Apple Intelligence not enabled"})

    env = codec.decode(raw.decode("utf-8"))

    assert env.payload == StatusUpdate(capability_available=False, status_text="Apple Intelligence not enabled")
    assert env.request_id is None


def test_decode_summarize_request_without_note_id() -> None:
    env = MessageCodec().decode(_wire("summarize-request", {"requestId": "r1", "content": "text"}))
    assert env.payload == SummarizeRequest(request_id="r1", content="text")


def test_encode_rejects_response_with_both_outcomes() -> None:
    bad = SummarizeResponse(request_id="r1", success=True, generated_at=1.0, result="x", error="y")
    with pytest.raises(ValueError):
        MessageCodec().encode(Envelope.wrap(bad))


@pytest.mark.parametrize(
    "raw",
    [
        b"not json",
        b"[]",
        orjson.dumps({"timestamp": 1, "payload": {}}),
        _wire("delete-everything", {}),
        _wire("status-update", {"capabilityAvailable": True, "statusText": "ok"}, timestamp=True),
        _wire("status-update", {"capabilityAvailable": "yes", "statusText": "ok"}),
        orjson.dumps({"kind": "status-update", "timestamp": 1, "payload": "nope"}),
        _wire("summarize-request", {"content": "missing id"}),
        _wire("summarize-request", {"requestId": "", "content": "empty id"}),
        _wire("summarize-response", {"requestId": "r", "success": True, "generatedAt": 1}),
        _wire("summarize-response", {"requestId": "r", "success": False, "generatedAt": 1}),
        _wire("summarize-response", {"requestId": "r", "success": True, "result": "a", "error": "b", "generatedAt": 1}),
        _wire("summarize-response", {"requestId": "r", "success": True, "result": "a"}),
        _wire("transcribe-response", {"requestId": "r", "success": "true", "result": "a"}),
        _wire("transcribe-request", {"requestId": "r", "audioBytes": "***not base64***"}),
    ],
)
def test_decode_rejects_malformed_input(raw: bytes) -> None:
    with pytest.raises(DecodeError) as excinfo:
        MessageCodec().decode(raw)
    assert excinfo.value.reason == "malformed"


def test_decode_rejects_audio_over_size_bound() -> None:
    codec = MessageCodec(max_audio_bytes=8)
    blob = base64.b64encode(b"x" * 64).decode("ascii")

    with pytest.raises(DecodeError):
        codec.decode(_wire("transcribe-request", {"requestId": "r", "audioBytes": blob}))


def test_decode_round_trips_audio_at_size_bound() -> None:
    codec = MessageCodec(max_audio_bytes=6)
    env = Envelope.wrap(TranscribeRequest(request_id="r", audio_bytes=b"abcdef"))

    decoded = codec.decode(codec.encode(env))

    assert decoded.payload.audio_bytes == b"abcdef"


@pytest.mark.parametrize(
    "payload",
    [
        SummarizeRequest(request_id="s1", content="Pick up the dry cleaning before six.", note_id="n1"),
        SummarizeRequest(request_id="s2", content="No note attached"),
        SummarizeResponse.ok("s1", " Dry cleaning by six.\n", generated_at=1700000123.25),
        SummarizeResponse.failed("s2", "Apple Intelligence not enabled", generated_at=1700000124.5),
        TranscribeRequest(request_id="t1", audio_bytes=bytes(range(256))),
        TranscribeResponse.ok("t1", "remind me at noon"),
        TranscribeResponse.failed("t2", "emptyResult"),
        StatusUpdate(capability_available=True, status_text="Ready"),
    ],
    ids=lambda p: p.KIND,
)
def test_decode_inverts_encode_for_every_kind(payload) -> None:
    codec = MessageCodec()
    env = Envelope.wrap(payload, timestamp=1700000000.75)

    assert codec.decode(codec.encode(env)) == env
