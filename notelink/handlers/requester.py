"""Requesting peer: sends summarize/transcribe requests and correlates responses."""

from __future__ import annotations

import uuid
import asyncio
import logging
from collections.abc import Callable

from notelink.state.pending import RequestOutcome
from notelink.config.limits import MIN_SUMMARY_CHARS
from notelink.state.connection import PeerConnectionState
from notelink.transport.adapter import TransportAdapter
from notelink.transport.events import ActivationCompleted
from notelink.correlation.pending import PendingRequestTracker
from notelink.config.protocol import (
    ERROR_TIMEOUT,
    ERROR_SEND_FAILED,
    KIND_SUMMARIZE_REQUEST,
    KIND_TRANSCRIBE_REQUEST,
    STATUS_PEER_DISCONNECTED,
)
from notelink.protocol.messages import (
    Envelope,
    StatusUpdate,
    SummarizeRequest,
    SummarizeResponse,
    TranscribeRequest,
    TranscribeResponse,
)
from notelink.errors import (
    TransportError,
    RequestRejected,
    REJECT_TOO_SHORT,
    REJECT_PEER_UNREACHABLE,
    REJECT_CAPABILITY_UNAVAILABLE,
)

from .subscriptions import CompletionHub, Subscription, CompletionCallback

logger = logging.getLogger(__name__)

_RESPONSE_FOR = {
    SummarizeResponse: KIND_SUMMARIZE_REQUEST,
    TranscribeResponse: KIND_TRANSCRIBE_REQUEST,
}


class RequestingPeerService:
    """Lightweight-peer side of the protocol.

    Requests are fire-and-forget: ``request_*`` returns the request id once
    the payload is handed to the transport; the outcome arrives later through
    ``subscribe`` callbacks or ``wait_for``. A send the link refuses is
    completed with ``sendFailed`` and the ``TransportError`` propagates to
    the caller, so no id is returned for a request that never left.
    """

    def __init__(
        self,
        adapter: TransportAdapter,
        *,
        tracker: PendingRequestTracker | None = None,
        hub: CompletionHub | None = None,
        min_summary_chars: int = MIN_SUMMARY_CHARS,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._adapter = adapter
        self._tracker = tracker or PendingRequestTracker()
        self._hub = hub or CompletionHub()
        self._min_summary_chars = int(min_summary_chars)
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))
        self._state = PeerConnectionState()

    @property
    def connection(self) -> PeerConnectionState:
        return self._state

    # ---- outbound ----

    async def request_summary(self, note_id: str, content: str) -> str:
        self._require_reachable()
        if not self._state.capability_available:
            raise RequestRejected(REJECT_CAPABILITY_UNAVAILABLE, self._state.status_text)
        if len(content) < self._min_summary_chars:
            raise RequestRejected(REJECT_TOO_SHORT, "Note too short to summarize")

        request_id = self._new_id()
        envelope = Envelope.wrap(SummarizeRequest(request_id=request_id, content=content, note_id=note_id))
        await self._submit(envelope, request_id, KIND_SUMMARIZE_REQUEST, subject_id=note_id)
        return request_id

    async def request_transcription(self, audio_id: str, audio_bytes: bytes) -> str:
        self._require_reachable()
        request_id = self._new_id()
        envelope = Envelope.wrap(TranscribeRequest(request_id=request_id, audio_bytes=audio_bytes))
        await self._submit(envelope, request_id, KIND_TRANSCRIBE_REQUEST, subject_id=audio_id)
        return request_id

    def _require_reachable(self) -> None:
        if not self._adapter.reachable:
            raise RequestRejected(REJECT_PEER_UNREACHABLE, "Companion not reachable")

    async def _submit(self, envelope: Envelope, request_id: str, kind: str, *, subject_id: str | None) -> None:
        self._tracker.register(request_id, kind, subject_id=subject_id)
        try:
            channel = await self._adapter.send(envelope)
        except TransportError as exc:
            logger.warning("send of %s %s failed: %s", kind, request_id, exc)
            self._complete(self._tracker.resolve_error(request_id, ERROR_SEND_FAILED))
            raise
        logger.debug("sent %s %s via %s channel", kind, request_id, channel)

    # ---- completion ----

    def is_pending(self, request_id: str) -> bool:
        return self._tracker.is_pending(request_id)

    def pending_for_note(self, note_id: str) -> bool:
        return self._tracker.has_subject(note_id)

    def subscribe(self, callback: CompletionCallback, *, request_id: str | None = None) -> Subscription:
        return self._hub.subscribe(callback, request_id=request_id)

    async def wait_for(self, request_id: str) -> RequestOutcome:
        pending = self._tracker.get(request_id)
        if pending is None or pending.completion is None:
            raise KeyError(f"request {request_id} is not pending")
        return await asyncio.shield(pending.completion)

    def expire_stale(self, lifetime_s: float) -> list[RequestOutcome]:
        expired: list[RequestOutcome] = []
        for request_id in self._tracker.expired(lifetime_s):
            outcome = self._tracker.resolve_error(request_id, ERROR_TIMEOUT)
            if outcome is not None:
                logger.info("request %s timed out after %.1fs", request_id, lifetime_s)
                self._complete(outcome)
                expired.append(outcome)
        return expired

    def _complete(self, outcome: RequestOutcome | None) -> None:
        if outcome is not None:
            self._hub.publish(outcome)

    # ---- inbound ----

    def handle_envelope(self, envelope: Envelope) -> RequestOutcome | None:
        payload = envelope.payload
        if isinstance(payload, (SummarizeResponse, TranscribeResponse)):
            return self._handle_response(payload)
        if isinstance(payload, StatusUpdate):
            self._state.capability_available = payload.capability_available
            self._state.status_text = payload.status_text
            return None
        logger.debug("requesting peer ignores %s", envelope.kind)
        return None

    def _handle_response(self, payload: SummarizeResponse | TranscribeResponse) -> RequestOutcome | None:
        pending = self._tracker.get(payload.request_id)
        if pending is None:
            logger.debug("response for %s is not pending (duplicate or stray)", payload.request_id)
            return None
        if pending.kind != _RESPONSE_FOR[type(payload)]:
            logger.warning("response kind %s does not match pending %s %s", payload.KIND, pending.kind, pending.request_id)
            return None
        outcome = self._tracker.resolve(
            payload.request_id,
            success=payload.success,
            result=payload.result,
            error=payload.error,
        )
        self._complete(outcome)
        return outcome

    def handle_activation(self, event: ActivationCompleted) -> None:
        if not event.succeeded:
            self._state.status_text = "Connection failed"
            return
        self._state.peer_paired = self._adapter.paired
        self._state.peer_app_installed = self._adapter.app_installed
        self.handle_reachability(self._adapter.reachable)

    def handle_reachability(self, reachable: bool) -> None:
        self._state.peer_reachable = reachable
        if not reachable:
            self._state.capability_available = False
            self._state.status_text = STATUS_PEER_DISCONNECTED

    def handle_pairing(self, paired: bool, app_installed: bool) -> None:
        self._state.peer_paired = paired
        self._state.peer_app_installed = app_installed


__all__ = ["RequestingPeerService"]
