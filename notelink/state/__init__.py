from .notes import Note
from .runtime import PeerRuntime
from .settings import AppSettings
from .pending import PendingRequest, RequestOutcome
from .connection import CapabilityStatus, PeerConnectionState
from .diagnostics import ResponderDiagnostics

__all__ = [
    "AppSettings",
    "CapabilityStatus",
    "Note",
    "PeerConnectionState",
    "PeerRuntime",
    "PendingRequest",
    "RequestOutcome",
    "ResponderDiagnostics",
]
