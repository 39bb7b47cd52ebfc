from .recent import CompletedRequestCache
from .pending import PendingRequestTracker
from .inflight import InFlightTracker

__all__ = ["CompletedRequestCache", "InFlightTracker", "PendingRequestTracker"]
