from .actor import PeerActor
from .notes import NoteSummaryApplier
from .watchdog import PendingWatchdog
from .requester import RequestingPeerService
from .responder import RespondingPeerService
from .broadcaster import AvailabilityBroadcaster
from .subscriptions import CompletionHub, Subscription

__all__ = [
    "AvailabilityBroadcaster",
    "CompletionHub",
    "NoteSummaryApplier",
    "PeerActor",
    "PendingWatchdog",
    "RequestingPeerService",
    "RespondingPeerService",
    "Subscription",
]
