"""Encode/decode for every envelope kind.

Schema validation happens here, once, at the boundary. ``decode`` is pure:
it either returns a fully populated ``Envelope`` or raises ``DecodeError``.
"""

from __future__ import annotations

from typing import Any
from collections.abc import Callable

import orjson

from notelink.errors import DecodeError
from notelink.config.limits import MAX_AUDIO_BYTES
from notelink.config.protocol import (
    F_ERROR,
    KEY_KIND,
    F_RESULT,
    F_CONTENT,
    F_NOTE_ID,
    F_SUCCESS,
    KEY_PAYLOAD,
    F_REQUEST_ID,
    F_STATUS_TEXT,
    F_AUDIO_BYTES,
    KEY_TIMESTAMP,
    F_GENERATED_AT,
    F_CAPABILITY_AVAILABLE,
)

from .fields import (
    encode_blob,
    optional_str,
    require_blob,
    require_bool,
    require_str,
    require_number,
    require_object,
    exactly_one_outcome,
)
from .messages import (
    Payload,
    Envelope,
    StatusUpdate,
    SummarizeRequest,
    SummarizeResponse,
    TranscribeRequest,
    TranscribeResponse,
)

WireMessage = dict[str, Any]


class MessageCodec:
    def __init__(self, *, max_audio_bytes: int = MAX_AUDIO_BYTES) -> None:
        self.max_audio_bytes = int(max_audio_bytes)
        self._decoders: dict[str, Callable[[WireMessage], Payload]] = {
            SummarizeRequest.KIND: self._decode_summarize_request,
            SummarizeResponse.KIND: self._decode_summarize_response,
            TranscribeRequest.KIND: self._decode_transcribe_request,
            TranscribeResponse.KIND: self._decode_transcribe_response,
            StatusUpdate.KIND: self._decode_status_update,
        }

    # ---- encode ----

    def encode(self, envelope: Envelope) -> bytes:
        return orjson.dumps(self.to_wire(envelope))

    def to_wire(self, envelope: Envelope) -> WireMessage:
        if envelope.kind != envelope.payload.KIND:
            raise ValueError(f"envelope kind {envelope.kind!r} does not match payload {envelope.payload.KIND!r}")
        return {
            KEY_KIND: envelope.kind,
            KEY_TIMESTAMP: float(envelope.timestamp),
            KEY_PAYLOAD: self._payload_to_wire(envelope.payload),
        }

    def _payload_to_wire(self, payload: Payload) -> WireMessage:
        if isinstance(payload, SummarizeRequest):
            out: WireMessage = {F_REQUEST_ID: payload.request_id, F_CONTENT: payload.content}
            if payload.note_id is not None:
                out[F_NOTE_ID] = payload.note_id
            return out
        if isinstance(payload, TranscribeRequest):
            return {F_REQUEST_ID: payload.request_id, F_AUDIO_BYTES: encode_blob(payload.audio_bytes)}
        if isinstance(payload, SummarizeResponse):
            out = {F_REQUEST_ID: payload.request_id, F_SUCCESS: payload.success, F_GENERATED_AT: payload.generated_at}
            return self._with_outcome(out, payload.success, payload.result, payload.error)
        if isinstance(payload, TranscribeResponse):
            out = {F_REQUEST_ID: payload.request_id, F_SUCCESS: payload.success}
            return self._with_outcome(out, payload.success, payload.result, payload.error)
        if isinstance(payload, StatusUpdate):
            return {F_CAPABILITY_AVAILABLE: payload.capability_available, F_STATUS_TEXT: payload.status_text}
        raise TypeError(f"unsupported payload type: {type(payload).__name__}")

    @staticmethod
    def _with_outcome(out: WireMessage, success: bool, result: str | None, error: str | None) -> WireMessage:
        if success:
            if result is None or error is not None:
                raise ValueError("successful response must carry a result and no error")
            out[F_RESULT] = result
        else:
            if error is None or result is not None:
                raise ValueError("failed response must carry an error and no result")
            out[F_ERROR] = error
        return out

    # ---- decode ----

    def decode(self, raw: bytes | str | WireMessage) -> Envelope:
        msg = raw if isinstance(raw, dict) else self._loads(raw)
        if not isinstance(msg, dict):
            raise DecodeError("message must be a JSON object")

        kind = require_str(msg, KEY_KIND)
        decoder = self._decoders.get(kind)
        if decoder is None:
            raise DecodeError(f"unsupported message kind: {kind!r}")
        timestamp = require_number(msg, KEY_TIMESTAMP)
        payload = decoder(require_object(msg, KEY_PAYLOAD))
        return Envelope(kind=kind, payload=payload, timestamp=timestamp)

    @staticmethod
    def _loads(raw: bytes | str) -> Any:
        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise DecodeError(f"invalid JSON: {exc}") from exc

    def _decode_summarize_request(self, p: WireMessage) -> SummarizeRequest:
        return SummarizeRequest(
            request_id=require_str(p, F_REQUEST_ID, non_empty=True),
            content=require_str(p, F_CONTENT),
            note_id=optional_str(p, F_NOTE_ID),
        )

    def _decode_summarize_response(self, p: WireMessage) -> SummarizeResponse:
        request_id = require_str(p, F_REQUEST_ID, non_empty=True)
        success = require_bool(p, F_SUCCESS)
        generated_at = require_number(p, F_GENERATED_AT)
        result, error = exactly_one_outcome(p, success=success, result_key=F_RESULT, error_key=F_ERROR)
        return SummarizeResponse(
            request_id=request_id,
            success=success,
            generated_at=generated_at,
            result=result,
            error=error,
        )

    def _decode_transcribe_request(self, p: WireMessage) -> TranscribeRequest:
        return TranscribeRequest(
            request_id=require_str(p, F_REQUEST_ID, non_empty=True),
            audio_bytes=require_blob(p, F_AUDIO_BYTES, max_bytes=self.max_audio_bytes),
        )

    def _decode_transcribe_response(self, p: WireMessage) -> TranscribeResponse:
        request_id = require_str(p, F_REQUEST_ID, non_empty=True)
        success = require_bool(p, F_SUCCESS)
        result, error = exactly_one_outcome(p, success=success, result_key=F_RESULT, error_key=F_ERROR)
        return TranscribeResponse(request_id=request_id, success=success, result=result, error=error)

    def _decode_status_update(self, p: WireMessage) -> StatusUpdate:
        return StatusUpdate(
            capability_available=require_bool(p, F_CAPABILITY_AVAILABLE),
            status_text=require_str(p, F_STATUS_TEXT),
        )


__all__ = ["MessageCodec", "WireMessage"]
