"""Load runtime settings.

Configuration values are resolved from the environment in `notelink/config/*`
and exposed here as structured dataclasses for the rest of the package.
"""

from __future__ import annotations

from notelink.config.secrets import get_pairing_key
from notelink.config.link import WS_PATH, OUTBOX_PATH, RECONNECT_S
from notelink.state.settings import (
    AppSettings,
    AuthSettings,
    LinkSettings,
    LimitsSettings,
    ProtocolSettings,
)
from notelink.config.limits import (
    COMPLETED_TTL_S,
    MAX_AUDIO_BYTES,
    PENDING_SWEEP_S,
    INBOUND_QUEUE_MAX,
    MIN_SUMMARY_CHARS,
    PENDING_TIMEOUT_S,
    TRANSIENT_MAX_BYTES,
    MAX_INFLIGHT_REQUESTS,
)


def load_settings() -> AppSettings:
    return AppSettings(
        auth=AuthSettings(pairing_key=get_pairing_key()),
        protocol=ProtocolSettings(
            min_summary_chars=MIN_SUMMARY_CHARS,
            transient_max_bytes=TRANSIENT_MAX_BYTES,
            max_audio_bytes=MAX_AUDIO_BYTES,
        ),
        limits=LimitsSettings(
            pending_timeout_s=PENDING_TIMEOUT_S,
            pending_sweep_s=PENDING_SWEEP_S,
            max_inflight_requests=MAX_INFLIGHT_REQUESTS,
            completed_ttl_s=COMPLETED_TTL_S,
            inbound_queue_max=INBOUND_QUEUE_MAX,
        ),
        link=LinkSettings(
            ws_path=WS_PATH,
            reconnect_s=RECONNECT_S,
            outbox_path=OUTBOX_PATH,
        ),
    )


__all__ = ["load_settings"]
