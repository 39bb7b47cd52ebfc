"""Wire protocol constants: envelope keys, message kinds and payload fields."""

from __future__ import annotations

# Envelope keys
KEY_KIND = "kind"
KEY_PAYLOAD = "payload"
KEY_TIMESTAMP = "timestamp"

# Message kinds
KIND_SUMMARIZE_REQUEST = "summarize-request"
KIND_SUMMARIZE_RESPONSE = "summarize-response"
KIND_TRANSCRIBE_REQUEST = "transcribe-request"
KIND_TRANSCRIBE_RESPONSE = "transcribe-response"
KIND_STATUS_UPDATE = "status-update"

REQUEST_KINDS = frozenset({KIND_SUMMARIZE_REQUEST, KIND_TRANSCRIBE_REQUEST})
RESPONSE_KINDS = frozenset({KIND_SUMMARIZE_RESPONSE, KIND_TRANSCRIBE_RESPONSE})

# Payload fields
F_REQUEST_ID = "requestId"
F_NOTE_ID = "noteId"
F_CONTENT = "content"
F_AUDIO_BYTES = "audioBytes"
F_SUCCESS = "success"
F_RESULT = "result"
F_ERROR = "error"
F_GENERATED_AT = "generatedAt"
F_CAPABILITY_AVAILABLE = "capabilityAvailable"
F_STATUS_TEXT = "statusText"

# Response error codes added on top of the engine taxonomies.
ERROR_SEND_FAILED = "sendFailed"
ERROR_TIMEOUT = "timeout"
ERROR_RESPONDER_BUSY = "responderBusy"
ERROR_INTERNAL = "internalError"

# Status text shown on the requesting peer while the companion is away.
STATUS_PEER_DISCONNECTED = "Companion not connected"
STATUS_CONNECTING = "Connecting to companion..."

__all__ = [
    "ERROR_INTERNAL",
    "ERROR_RESPONDER_BUSY",
    "ERROR_SEND_FAILED",
    "ERROR_TIMEOUT",
    "F_AUDIO_BYTES",
    "F_CAPABILITY_AVAILABLE",
    "F_CONTENT",
    "F_ERROR",
    "F_GENERATED_AT",
    "F_NOTE_ID",
    "F_REQUEST_ID",
    "F_RESULT",
    "F_STATUS_TEXT",
    "F_SUCCESS",
    "KEY_KIND",
    "KEY_PAYLOAD",
    "KEY_TIMESTAMP",
    "KIND_STATUS_UPDATE",
    "KIND_SUMMARIZE_REQUEST",
    "KIND_SUMMARIZE_RESPONSE",
    "KIND_TRANSCRIBE_REQUEST",
    "KIND_TRANSCRIBE_RESPONSE",
    "REQUEST_KINDS",
    "RESPONSE_KINDS",
    "STATUS_CONNECTING",
    "STATUS_PEER_DISCONNECTED",
]
