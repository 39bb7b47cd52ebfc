"""Engine invocations that always end in exactly one response payload."""

from __future__ import annotations

import logging

from notelink.config.protocol import ERROR_INTERNAL, ERROR_RESPONDER_BUSY
from notelink.engines.codes import SUMMARY_CODES, RECOGNITION_CODES, RECOGNITION_FAILED, RECOGNITION_EMPTY_RESULT
from notelink.engines.summarizer import Summarizer
from notelink.engines.transcriber import Transcriber
from notelink.errors import RecognitionError, SummarizationError
from notelink.protocol.messages import (
    RequestPayload,
    ResponsePayload,
    SummarizeRequest,
    SummarizeResponse,
    TranscribeRequest,
    TranscribeResponse,
)

logger = logging.getLogger(__name__)


async def run_summarize(summarizer: Summarizer, request: SummarizeRequest) -> SummarizeResponse:
    rid = request.request_id
    try:
        summary = await summarizer.summarize(request.content)
    except SummarizationError as exc:
        if exc.code not in SUMMARY_CODES:
            logger.warning("summarizer raised unknown code %r for %s", exc.code, rid)
        logger.info("summarize %s failed: %s", rid, exc)
        return SummarizeResponse.failed(rid, exc.description)
    except Exception:
        logger.exception("summarizer crashed on %s", rid)
        return SummarizeResponse.failed(rid, ERROR_INTERNAL)
    return SummarizeResponse.ok(rid, summary)


async def run_transcribe(transcriber: Transcriber, request: TranscribeRequest) -> TranscribeResponse:
    rid = request.request_id
    try:
        text = await transcriber.transcribe(request.audio_bytes)
    except RecognitionError as exc:
        logger.info("transcribe %s failed: %s", rid, exc)
        code = exc.code if exc.code in RECOGNITION_CODES else RECOGNITION_FAILED
        return TranscribeResponse.failed(rid, code)
    except Exception:
        logger.exception("transcriber crashed on %s", rid)
        return TranscribeResponse.failed(rid, ERROR_INTERNAL)
    if not text.strip():
        return TranscribeResponse.failed(rid, RECOGNITION_EMPTY_RESULT)
    return TranscribeResponse.ok(rid, text)


def busy_response(request: RequestPayload) -> ResponsePayload:
    if isinstance(request, SummarizeRequest):
        return SummarizeResponse.failed(request.request_id, ERROR_RESPONDER_BUSY)
    return TranscribeResponse.failed(request.request_id, ERROR_RESPONDER_BUSY)


__all__ = ["busy_response", "run_summarize", "run_transcribe"]
