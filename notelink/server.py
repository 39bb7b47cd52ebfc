"""FastAPI host for the responding peer.

The capable peer serves the link WebSocket; the requesting peer connects to it
with ``WebSocketClientLink``.
"""

from __future__ import annotations

import logging
import contextlib
from typing import Any
from dataclasses import asdict
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from notelink.state.runtime import PeerRuntime
from notelink.state.settings import AppSettings
from notelink.engines.summarizer import Summarizer
from notelink.engines.transcriber import Transcriber
from notelink.runtime.settings import load_settings
from notelink.runtime.logging import configure_logging
from notelink.transport.auth import authenticate_websocket
from notelink.transport.outbox import DurableOutbox
from notelink.transport.ws_server import WebSocketServerLink
from notelink.runtime.dependencies import build_responder_runtime
from notelink.config.link import WS_CLOSE_UNPAIRED_CODE, WS_CLOSE_UNPAIRED_REASON

logger = logging.getLogger(__name__)

configure_logging()


def _runtime(app: FastAPI) -> PeerRuntime:
    runtime = getattr(app.state, "runtime", None)
    if runtime is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime


def create_app(
    *,
    summarizer: Summarizer,
    transcriber: Transcriber,
    settings: AppSettings | None = None,
) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        link = WebSocketServerLink(outbox=DurableOutbox(path=settings.link.outbox_path))
        runtime = build_responder_runtime(link, summarizer=summarizer, transcriber=transcriber, settings=settings)
        app.state.link = link
        app.state.runtime = runtime
        await runtime.start()
        logger.info("runtime: ready")
        try:
            yield
        finally:
            await runtime.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/status")
    async def status() -> dict[str, Any]:
        runtime = _runtime(app)
        summary = summarizer.check_availability()
        transcription = transcriber.check_availability()
        diagnostics = runtime.responder.diagnostics if runtime.responder is not None else None
        return {
            "peer_reachable": runtime.adapter.reachable,
            "broadcast_state": runtime.broadcaster.state if runtime.broadcaster is not None else None,
            "summarizer": {"available": summary.capability_available, "status": summary.status_text},
            "transcriber": {"available": transcription.capability_available, "status": transcription.status_text},
            "queued_responses": app.state.link.queued_user_info,
            "diagnostics": asdict(diagnostics) if diagnostics is not None else None,
        }

    @app.websocket(settings.link.ws_path)
    async def link_endpoint(websocket: WebSocket) -> None:
        _runtime(app)
        if not await authenticate_websocket(websocket, expected_pairing_key=settings.auth.pairing_key):
            # Accept so the close code reaches the client.
            with contextlib.suppress(Exception):
                await websocket.accept()
                await websocket.close(code=WS_CLOSE_UNPAIRED_CODE, reason=WS_CLOSE_UNPAIRED_REASON)
            logger.warning("rejected peer with a bad pairing key")
            return
        await websocket.accept()
        await app.state.link.serve(websocket)

    return app


__all__ = ["create_app"]
