"""Text frames carried by the WebSocket peer link."""

from __future__ import annotations

import orjson

from notelink.errors import DecodeError
from notelink.config.link import (
    CHANNEL_ACK,
    FRAME_KEY_BODY,
    CHANNEL_MESSAGE,
    CHANNEL_USER_INFO,
    FRAME_KEY_CHANNEL,
)

FRAME_CHANNELS = frozenset({CHANNEL_MESSAGE, CHANNEL_USER_INFO, CHANNEL_ACK})


def encode_frame(channel: str, body: bytes) -> str:
    """Wrap an already-encoded JSON body without re-serializing it."""
    frame = {FRAME_KEY_CHANNEL: channel, FRAME_KEY_BODY: orjson.Fragment(body)}
    return orjson.dumps(frame).decode("utf-8")


ACK_FRAME = encode_frame(CHANNEL_ACK, orjson.dumps({"received": True}))


def parse_frame(raw: str | bytes) -> tuple[str, bytes]:
    """Return ``(channel, body)`` with the body re-encoded as JSON bytes."""
    try:
        frame = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise DecodeError(f"frame is not valid JSON: {exc}") from exc
    if not isinstance(frame, dict):
        raise DecodeError("frame must be a JSON object")
    channel = frame.get(FRAME_KEY_CHANNEL)
    if channel not in FRAME_CHANNELS:
        raise DecodeError(f"unknown frame channel: {channel!r}")
    if FRAME_KEY_BODY not in frame:
        raise DecodeError("frame has no body")
    return channel, orjson.dumps(frame[FRAME_KEY_BODY])


__all__ = ["ACK_FRAME", "FRAME_CHANNELS", "encode_frame", "parse_frame"]
