"""Message codec: envelope types and their wire encoding."""

from .codec import MessageCodec
from .messages import (
    Envelope,
    StatusUpdate,
    SummarizeRequest,
    SummarizeResponse,
    TranscribeRequest,
    TranscribeResponse,
)

__all__ = [
    "Envelope",
    "MessageCodec",
    "StatusUpdate",
    "SummarizeRequest",
    "SummarizeResponse",
    "TranscribeRequest",
    "TranscribeResponse",
]
