"""Runtime dependency construction for either peer role."""

from __future__ import annotations

import logging

from notelink.state.settings import AppSettings
from notelink.protocol.codec import MessageCodec
from notelink.engines.summarizer import Summarizer
from notelink.engines.transcriber import Transcriber
from notelink.transport.link import PeerLink
from notelink.transport.adapter import TransportAdapter
from notelink.correlation.pending import PendingRequestTracker
from notelink.correlation.recent import CompletedRequestCache
from notelink.handlers.actor import PeerActor
from notelink.handlers.watchdog import PendingWatchdog
from notelink.handlers.requester import RequestingPeerService
from notelink.handlers.responder import RespondingPeerService
from notelink.handlers.broadcaster import AvailabilityBroadcaster
from notelink.state.runtime import PeerRuntime, ROLE_REQUESTER, ROLE_RESPONDER

from .settings import load_settings

logger = logging.getLogger(__name__)


def _build_adapter(link: PeerLink, settings: AppSettings) -> TransportAdapter:
    return TransportAdapter(
        link,
        codec=MessageCodec(max_audio_bytes=settings.protocol.max_audio_bytes),
        transient_max_bytes=settings.protocol.transient_max_bytes,
        inbound_queue_max=settings.limits.inbound_queue_max,
    )


def build_requester_runtime(link: PeerLink, *, settings: AppSettings | None = None) -> PeerRuntime:
    settings = settings or load_settings()
    adapter = _build_adapter(link, settings)
    requester = RequestingPeerService(
        adapter,
        tracker=PendingRequestTracker(),
        min_summary_chars=settings.protocol.min_summary_chars,
    )
    watchdog = PendingWatchdog(
        requester,
        timeout_s=settings.limits.pending_timeout_s,
        tick_s=settings.limits.pending_sweep_s,
    )
    actor = PeerActor(adapter, requester=requester)
    return PeerRuntime(
        role=ROLE_REQUESTER,
        adapter=adapter,
        actor=actor,
        settings=settings,
        requester=requester,
        watchdog=watchdog,
    )


def build_responder_runtime(
    link: PeerLink,
    *,
    summarizer: Summarizer,
    transcriber: Transcriber,
    settings: AppSettings | None = None,
) -> PeerRuntime:
    settings = settings or load_settings()
    adapter = _build_adapter(link, settings)
    responder = RespondingPeerService(
        adapter,
        summarizer=summarizer,
        transcriber=transcriber,
        recent=CompletedRequestCache(ttl_seconds=settings.limits.completed_ttl_s),
        max_inflight=settings.limits.max_inflight_requests,
    )
    broadcaster = AvailabilityBroadcaster(adapter, summarizer=summarizer)
    actor = PeerActor(adapter, responder=responder, broadcaster=broadcaster)
    if settings.limits.max_inflight_requests > 0:
        logger.info("responder concurrency ceiling: %s", settings.limits.max_inflight_requests)
    return PeerRuntime(
        role=ROLE_RESPONDER,
        adapter=adapter,
        actor=actor,
        settings=settings,
        responder=responder,
        broadcaster=broadcaster,
    )


__all__ = ["PeerRuntime", "build_requester_runtime", "build_responder_runtime"]
