"""Responding peer: deduplicates requests, runs engines, sends one response each."""

from __future__ import annotations

import time
import asyncio
import logging
from dataclasses import replace

from notelink.engines.summarizer import Summarizer
from notelink.engines.transcriber import Transcriber
from notelink.correlation.recent import CompletedRequestCache
from notelink.correlation.inflight import InFlightTracker
from notelink.state.diagnostics import ResponderDiagnostics
from notelink.transport.adapter import TransportAdapter
from notelink.config.limits import COMPLETED_TTL_S, MAX_INFLIGHT_REQUESTS
from notelink.protocol.messages import (
    Envelope,
    RequestPayload,
    ResponsePayload,
    SummarizeRequest,
    TranscribeRequest,
)

from .pipelines import busy_response, run_summarize, run_transcribe

logger = logging.getLogger(__name__)


class RespondingPeerService:
    """Capable-peer side of the protocol.

    A request may arrive on both the transient and the durable channel. The
    first copy to arrive is processed; copies seen while it is in flight, or
    shortly after it completed, are discarded.
    """

    def __init__(
        self,
        adapter: TransportAdapter,
        *,
        summarizer: Summarizer,
        transcriber: Transcriber,
        inflight: InFlightTracker | None = None,
        recent: CompletedRequestCache | None = None,
        max_inflight: int = MAX_INFLIGHT_REQUESTS,
        completed_ttl_s: float = COMPLETED_TTL_S,
    ) -> None:
        self._adapter = adapter
        self._summarizer = summarizer
        self._transcriber = transcriber
        self._inflight = inflight or InFlightTracker()
        self._recent = recent if recent is not None else CompletedRequestCache(ttl_seconds=completed_ttl_s)
        self._max_inflight = max(0, int(max_inflight))
        self._diagnostics = ResponderDiagnostics()
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def diagnostics(self) -> ResponderDiagnostics:
        return replace(self._diagnostics, inflight=self._inflight.count)

    def handle_envelope(self, envelope: Envelope) -> asyncio.Task[None] | None:
        """Accept a request and schedule its processing; None when discarded."""
        payload = envelope.payload
        if not isinstance(payload, (SummarizeRequest, TranscribeRequest)):
            logger.debug("responding peer ignores %s", envelope.kind)
            return None

        rid = payload.request_id
        if rid in self._recent or not self._inflight.try_begin(rid):
            self._diagnostics.duplicates += 1
            logger.debug("discarding duplicate %s %s", envelope.kind, rid)
            return None

        self._diagnostics.accepted += 1
        self._diagnostics.last_request_at = time.time()
        busy = self._max_inflight > 0 and self._inflight.count > self._max_inflight
        task = asyncio.create_task(self._process(payload, busy=busy))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every accepted request to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _process(self, payload: RequestPayload, *, busy: bool) -> None:
        rid = payload.request_id
        try:
            response = await self._build_response(payload, busy=busy)
            await self._adapter.send_response(Envelope.wrap(response))
            logger.debug("responded to %s %s (success=%s)", payload.KIND, rid, response.success)
        except Exception:
            logger.exception("failed to deliver response for %s", rid)
        finally:
            self._inflight.end(rid)
            self._recent.add(rid)

    async def _build_response(self, payload: RequestPayload, *, busy: bool) -> ResponsePayload:
        if busy:
            self._diagnostics.rejected_busy += 1
            logger.info("responder busy, rejecting %s", payload.request_id)
            return busy_response(payload)
        if isinstance(payload, SummarizeRequest):
            response: ResponsePayload = await run_summarize(self._summarizer, payload)
        else:
            response = await run_transcribe(self._transcriber, payload)
        if not response.success:
            self._diagnostics.engine_failures += 1
        return response


__all__ = ["RespondingPeerService"]
