"""Connectivity and capability state exchanged between the peers."""

from __future__ import annotations

from dataclasses import dataclass

from notelink.config.protocol import STATUS_CONNECTING


@dataclass(frozen=True, slots=True)
class CapabilityStatus:
    """What the capable peer can currently do, as advertised in status-update."""

    capability_available: bool
    status_text: str


@dataclass(slots=True)
class PeerConnectionState:
    """Requester-side view of the companion peer.

    Mutated only by link state changes and received status-update envelopes.
    """

    peer_reachable: bool = False
    peer_paired: bool = False
    peer_app_installed: bool = False
    capability_available: bool = False
    status_text: str = STATUS_CONNECTING


__all__ = ["CapabilityStatus", "PeerConnectionState"]
