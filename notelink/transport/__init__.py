from .link import PeerLink
from .outbox import DurableOutbox
from .adapter import TransportAdapter
from .delegate import LinkDelegate
from .loopback import LoopbackLink
from .ws_client import WebSocketClientLink
from .ws_server import WebSocketServerLink
from .events import (
    CHANNEL_DURABLE,
    CHANNEL_TRANSIENT,
    CHANNEL_LARGE_PAYLOAD,
    LinkEvent,
    PairingChanged,
    EnvelopeReceived,
    ActivationCompleted,
    ReachabilityChanged,
)

__all__ = [
    "CHANNEL_DURABLE",
    "CHANNEL_LARGE_PAYLOAD",
    "CHANNEL_TRANSIENT",
    "ActivationCompleted",
    "DurableOutbox",
    "EnvelopeReceived",
    "LinkDelegate",
    "LinkEvent",
    "LoopbackLink",
    "PairingChanged",
    "PeerLink",
    "ReachabilityChanged",
    "TransportAdapter",
    "WebSocketClientLink",
    "WebSocketServerLink",
]
