"""Inbound events produced by the transport adapter (dataclasses only)."""

from __future__ import annotations

from typing import Union
from dataclasses import dataclass

from notelink.protocol.messages import Envelope

CHANNEL_TRANSIENT = "transient"
CHANNEL_DURABLE = "durable"
CHANNEL_LARGE_PAYLOAD = "large_payload"


@dataclass(frozen=True, slots=True)
class EnvelopeReceived:
    envelope: Envelope
    channel: str


@dataclass(frozen=True, slots=True)
class ActivationCompleted:
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class ReachabilityChanged:
    reachable: bool


@dataclass(frozen=True, slots=True)
class PairingChanged:
    paired: bool
    app_installed: bool


LinkEvent = Union[EnvelopeReceived, ActivationCompleted, ReachabilityChanged, PairingChanged]

__all__ = [
    "CHANNEL_DURABLE",
    "CHANNEL_LARGE_PAYLOAD",
    "CHANNEL_TRANSIENT",
    "ActivationCompleted",
    "EnvelopeReceived",
    "LinkEvent",
    "PairingChanged",
    "ReachabilityChanged",
]
