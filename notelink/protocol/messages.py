"""Envelope and payload types for every message kind (dataclasses only)."""

from __future__ import annotations

import time
from typing import ClassVar, Union
from dataclasses import field, dataclass

from notelink.config.protocol import (
    KIND_STATUS_UPDATE,
    KIND_SUMMARIZE_REQUEST,
    KIND_SUMMARIZE_RESPONSE,
    KIND_TRANSCRIBE_REQUEST,
    KIND_TRANSCRIBE_RESPONSE,
)


@dataclass(frozen=True, slots=True)
class SummarizeRequest:
    KIND: ClassVar[str] = KIND_SUMMARIZE_REQUEST

    request_id: str
    content: str
    note_id: str | None = None


@dataclass(frozen=True, slots=True)
class SummarizeResponse:
    KIND: ClassVar[str] = KIND_SUMMARIZE_RESPONSE

    request_id: str
    success: bool
    generated_at: float
    result: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, request_id: str, summary: str, *, generated_at: float | None = None) -> SummarizeResponse:
        at = time.time() if generated_at is None else generated_at
        return cls(request_id=request_id, success=True, generated_at=at, result=summary)

    @classmethod
    def failed(cls, request_id: str, error: str, *, generated_at: float | None = None) -> SummarizeResponse:
        at = time.time() if generated_at is None else generated_at
        return cls(request_id=request_id, success=False, generated_at=at, error=error)


@dataclass(frozen=True, slots=True)
class TranscribeRequest:
    KIND: ClassVar[str] = KIND_TRANSCRIBE_REQUEST

    request_id: str
    audio_bytes: bytes = field(repr=False)


@dataclass(frozen=True, slots=True)
class TranscribeResponse:
    KIND: ClassVar[str] = KIND_TRANSCRIBE_RESPONSE

    request_id: str
    success: bool
    result: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, request_id: str, transcription: str) -> TranscribeResponse:
        return cls(request_id=request_id, success=True, result=transcription)

    @classmethod
    def failed(cls, request_id: str, error: str) -> TranscribeResponse:
        return cls(request_id=request_id, success=False, error=error)


@dataclass(frozen=True, slots=True)
class StatusUpdate:
    KIND: ClassVar[str] = KIND_STATUS_UPDATE

    capability_available: bool
    status_text: str


Payload = Union[SummarizeRequest, SummarizeResponse, TranscribeRequest, TranscribeResponse, StatusUpdate]
RequestPayload = Union[SummarizeRequest, TranscribeRequest]
ResponsePayload = Union[SummarizeResponse, TranscribeResponse]


@dataclass(frozen=True, slots=True)
class Envelope:
    """The wire unit: a kind tag, the matching payload and a send timestamp."""

    kind: str
    payload: Payload
    timestamp: float

    @classmethod
    def wrap(cls, payload: Payload, *, timestamp: float | None = None) -> Envelope:
        return cls(kind=payload.KIND, payload=payload, timestamp=time.time() if timestamp is None else timestamp)

    @property
    def request_id(self) -> str | None:
        return getattr(self.payload, "request_id", None)


__all__ = [
    "Envelope",
    "Payload",
    "RequestPayload",
    "ResponsePayload",
    "StatusUpdate",
    "SummarizeRequest",
    "SummarizeResponse",
    "TranscribeRequest",
    "TranscribeResponse",
]
