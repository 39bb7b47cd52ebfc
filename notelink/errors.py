"""Shared error types for the notelink peers."""

from __future__ import annotations

from dataclasses import dataclass

DECODE_MALFORMED = "malformed"

TRANSPORT_PEER_UNREACHABLE = "peer_unreachable"
TRANSPORT_SEND_FAILED = "send_failed"
TRANSPORT_PAYLOAD_TOO_LARGE = "payload_too_large"

REJECT_PEER_UNREACHABLE = "peer_unreachable"
REJECT_CAPABILITY_UNAVAILABLE = "capability_unavailable"
REJECT_TOO_SHORT = "too_short"


@dataclass(eq=False, slots=True)
class DecodeError(ValueError):
    """Raised by the codec when wire data cannot become an envelope."""

    detail: str
    reason: str = DECODE_MALFORMED

    def __str__(self) -> str:
        return f"{self.reason}: {self.detail}"


@dataclass(eq=False, slots=True)
class TransportError(Exception):
    """Raised when a payload cannot be handed to the peer link."""

    reason: str
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.reason}: {self.detail}" if self.detail else self.reason


@dataclass(eq=False, slots=True)
class RequestRejected(Exception):
    """Raised before sending when a request fails a local precondition."""

    reason: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False, slots=True)
class SummarizationError(Exception):
    """Summarization engine failure (aiUnavailable, tooShort, generationFailed)."""

    code: str
    description: str

    def __str__(self) -> str:
        return self.description


@dataclass(eq=False, slots=True)
class RecognitionError(Exception):
    """Speech engine failure.

    ``code`` is one of notAuthorized, recognizerUnavailable, audioError,
    recognitionFailed, noResult, emptyResult.
    """

    code: str
    description: str = ""

    def __str__(self) -> str:
        return self.description or self.code


__all__ = [
    "DECODE_MALFORMED",
    "DecodeError",
    "REJECT_CAPABILITY_UNAVAILABLE",
    "REJECT_PEER_UNREACHABLE",
    "REJECT_TOO_SHORT",
    "RecognitionError",
    "RequestRejected",
    "SummarizationError",
    "TRANSPORT_PAYLOAD_TOO_LARGE",
    "TRANSPORT_PEER_UNREACHABLE",
    "TRANSPORT_SEND_FAILED",
    "TransportError",
]
