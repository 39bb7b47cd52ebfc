"""Peer link (WebSocket host) configuration and frame constants."""

from __future__ import annotations

from pathlib import Path

from ._env import get_str, get_float

ENV_WS_PATH = "NOTELINK_WS_PATH"
ENV_RECONNECT_S = "NOTELINK_RECONNECT_S"
ENV_OUTBOX_PATH = "NOTELINK_OUTBOX_PATH"

DEFAULT_WS_PATH = "/ws"
DEFAULT_RECONNECT_S = 2.0

WS_PATH: str = get_str(ENV_WS_PATH, DEFAULT_WS_PATH)

RECONNECT_S: float = get_float(ENV_RECONNECT_S, DEFAULT_RECONNECT_S)
if RECONNECT_S <= 0:
    RECONNECT_S = DEFAULT_RECONNECT_S

_OUTBOX_PATH_RAW = get_str(ENV_OUTBOX_PATH, "")
OUTBOX_PATH: Path | None = Path(_OUTBOX_PATH_RAW).expanduser() if _OUTBOX_PATH_RAW else None

# Frame keys and channels (text frames only; binary frames are file transfers)
FRAME_KEY_CHANNEL = "channel"
FRAME_KEY_BODY = "body"
CHANNEL_MESSAGE = "message"
CHANNEL_USER_INFO = "user_info"
CHANNEL_ACK = "ack"

# Pairing credentials
PAIRING_QUERY_PARAM = "pairing_key"
PAIRING_HEADER = "x-pairing-key"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_UNPAIRED_CODE = 4001
WS_CLOSE_REPLACED_CODE = 4003
WS_CLOSE_UNPAIRED_REASON = "pairing key rejected"
WS_CLOSE_REPLACED_REASON = "replaced by a newer connection"

__all__ = [
    "CHANNEL_ACK",
    "CHANNEL_MESSAGE",
    "CHANNEL_USER_INFO",
    "DEFAULT_RECONNECT_S",
    "DEFAULT_WS_PATH",
    "ENV_OUTBOX_PATH",
    "ENV_RECONNECT_S",
    "ENV_WS_PATH",
    "FRAME_KEY_BODY",
    "FRAME_KEY_CHANNEL",
    "OUTBOX_PATH",
    "PAIRING_HEADER",
    "PAIRING_QUERY_PARAM",
    "RECONNECT_S",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_REPLACED_CODE",
    "WS_CLOSE_REPLACED_REASON",
    "WS_CLOSE_UNPAIRED_CODE",
    "WS_CLOSE_UNPAIRED_REASON",
    "WS_PATH",
]
