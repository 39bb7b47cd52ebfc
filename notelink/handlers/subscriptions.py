"""Completion delivery: callbacks keyed by request id with explicit unsubscribe."""

from __future__ import annotations

import logging
import itertools
from dataclasses import field, dataclass
from collections.abc import Callable

from notelink.state.pending import RequestOutcome

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[RequestOutcome], None]


@dataclass(slots=True)
class Subscription:
    token: int
    request_id: str | None
    _hub: CompletionHub = field(repr=False, compare=False)

    def unsubscribe(self) -> None:
        self._hub.remove(self.token)


class CompletionHub:
    """Fan out request outcomes to subscribers.

    A subscription bound to a request id is dropped after that id completes;
    an unbound one sees every outcome until unsubscribed.
    """

    def __init__(self) -> None:
        self._tokens = itertools.count(1)
        self._callbacks: dict[int, tuple[str | None, CompletionCallback]] = {}

    def __len__(self) -> int:
        return len(self._callbacks)

    def subscribe(self, callback: CompletionCallback, *, request_id: str | None = None) -> Subscription:
        token = next(self._tokens)
        self._callbacks[token] = (request_id, callback)
        return Subscription(token=token, request_id=request_id, _hub=self)

    def remove(self, token: int) -> None:
        self._callbacks.pop(token, None)

    def publish(self, outcome: RequestOutcome) -> None:
        for token, (request_id, callback) in list(self._callbacks.items()):
            if request_id is not None and request_id != outcome.request_id:
                continue
            if request_id is not None:
                self._callbacks.pop(token, None)
            try:
                callback(outcome)
            except Exception:
                logger.exception("completion callback failed for %s", outcome.request_id)


__all__ = ["CompletionCallback", "CompletionHub", "Subscription"]
