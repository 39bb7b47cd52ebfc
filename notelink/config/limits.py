"""Protocol limits and request lifecycle tuning (env-resolved constants only)."""

from __future__ import annotations

from ._env import get_int, get_float

ENV_MIN_SUMMARY_CHARS = "NOTELINK_MIN_SUMMARY_CHARS"
ENV_TRANSIENT_MAX_BYTES = "NOTELINK_TRANSIENT_MAX_BYTES"
ENV_MAX_AUDIO_BYTES = "NOTELINK_MAX_AUDIO_BYTES"
ENV_PENDING_TIMEOUT_S = "NOTELINK_PENDING_TIMEOUT_S"
ENV_PENDING_SWEEP_S = "NOTELINK_PENDING_SWEEP_S"
ENV_MAX_INFLIGHT_REQUESTS = "NOTELINK_MAX_INFLIGHT_REQUESTS"
ENV_COMPLETED_TTL_S = "NOTELINK_COMPLETED_TTL_S"
ENV_INBOUND_QUEUE_MAX = "NOTELINK_INBOUND_QUEUE_MAX"

DEFAULT_MIN_SUMMARY_CHARS = 50
DEFAULT_TRANSIENT_MAX_BYTES = 64 * 1024
DEFAULT_MAX_AUDIO_BYTES = 25 * 1024 * 1024
DEFAULT_PENDING_TIMEOUT_S = 0.0
DEFAULT_PENDING_SWEEP_S = 1.0
DEFAULT_MAX_INFLIGHT_REQUESTS = 0
DEFAULT_COMPLETED_TTL_S = 30.0
DEFAULT_INBOUND_QUEUE_MAX = 256

# Summarize requests below this many characters are rejected before sending.
MIN_SUMMARY_CHARS: int = max(1, get_int(ENV_MIN_SUMMARY_CHARS, DEFAULT_MIN_SUMMARY_CHARS))

# Encoded envelopes above this size go through the large-payload channel.
TRANSIENT_MAX_BYTES: int = get_int(ENV_TRANSIENT_MAX_BYTES, DEFAULT_TRANSIENT_MAX_BYTES)
if TRANSIENT_MAX_BYTES <= 0:
    TRANSIENT_MAX_BYTES = DEFAULT_TRANSIENT_MAX_BYTES

# Decoded audio blobs above this size are rejected as malformed.
MAX_AUDIO_BYTES: int = get_int(ENV_MAX_AUDIO_BYTES, DEFAULT_MAX_AUDIO_BYTES)
if MAX_AUDIO_BYTES <= 0:
    MAX_AUDIO_BYTES = DEFAULT_MAX_AUDIO_BYTES

# 0 keeps pending requests until a response arrives.
PENDING_TIMEOUT_S: float = max(0.0, get_float(ENV_PENDING_TIMEOUT_S, DEFAULT_PENDING_TIMEOUT_S))
PENDING_SWEEP_S: float = get_float(ENV_PENDING_SWEEP_S, DEFAULT_PENDING_SWEEP_S)
if PENDING_SWEEP_S <= 0:
    PENDING_SWEEP_S = DEFAULT_PENDING_SWEEP_S

# 0 means no ceiling on concurrently processed requests.
MAX_INFLIGHT_REQUESTS: int = max(0, get_int(ENV_MAX_INFLIGHT_REQUESTS, DEFAULT_MAX_INFLIGHT_REQUESTS))

# How long a completed request id keeps absorbing late duplicates.
COMPLETED_TTL_S: float = max(0.0, get_float(ENV_COMPLETED_TTL_S, DEFAULT_COMPLETED_TTL_S))

INBOUND_QUEUE_MAX: int = max(1, get_int(ENV_INBOUND_QUEUE_MAX, DEFAULT_INBOUND_QUEUE_MAX))

__all__ = [
    "COMPLETED_TTL_S",
    "DEFAULT_COMPLETED_TTL_S",
    "DEFAULT_INBOUND_QUEUE_MAX",
    "DEFAULT_MAX_AUDIO_BYTES",
    "DEFAULT_MAX_INFLIGHT_REQUESTS",
    "DEFAULT_MIN_SUMMARY_CHARS",
    "DEFAULT_PENDING_SWEEP_S",
    "DEFAULT_PENDING_TIMEOUT_S",
    "DEFAULT_TRANSIENT_MAX_BYTES",
    "ENV_COMPLETED_TTL_S",
    "ENV_INBOUND_QUEUE_MAX",
    "ENV_MAX_AUDIO_BYTES",
    "ENV_MAX_INFLIGHT_REQUESTS",
    "ENV_MIN_SUMMARY_CHARS",
    "ENV_PENDING_SWEEP_S",
    "ENV_PENDING_TIMEOUT_S",
    "ENV_TRANSIENT_MAX_BYTES",
    "INBOUND_QUEUE_MAX",
    "MAX_AUDIO_BYTES",
    "MAX_INFLIGHT_REQUESTS",
    "MIN_SUMMARY_CHARS",
    "PENDING_SWEEP_S",
    "PENDING_TIMEOUT_S",
    "TRANSIENT_MAX_BYTES",
]
