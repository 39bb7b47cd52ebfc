"""Field readers used by the codec; each raises DecodeError on a bad value."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from notelink.errors import DecodeError


def require_str(obj: dict[str, Any], key: str, *, non_empty: bool = False) -> str:
    if key not in obj:
        raise DecodeError(f"missing field '{key}'")
    value = obj[key]
    if not isinstance(value, str):
        raise DecodeError(f"field '{key}' must be a string")
    if non_empty and not value.strip():
        raise DecodeError(f"field '{key}' must be a non-empty string")
    return value


def optional_str(obj: dict[str, Any], key: str) -> str | None:
    if obj.get(key) is None:
        return None
    return require_str(obj, key, non_empty=True)


def require_bool(obj: dict[str, Any], key: str) -> bool:
    if key not in obj:
        raise DecodeError(f"missing field '{key}'")
    value = obj[key]
    if not isinstance(value, bool):
        raise DecodeError(f"field '{key}' must be a boolean")
    return value


def require_number(obj: dict[str, Any], key: str) -> float:
    if key not in obj:
        raise DecodeError(f"missing field '{key}'")
    value = obj[key]
    # bool is an int subclass; a flag is never a valid time.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"field '{key}' must be a number")
    return float(value)


def require_object(obj: dict[str, Any], key: str) -> dict[str, Any]:
    if key not in obj:
        raise DecodeError(f"missing field '{key}'")
    value = obj[key]
    if not isinstance(value, dict):
        raise DecodeError(f"field '{key}' must be an object")
    return value


def estimate_b64_decoded_bytes(s: str) -> int:
    """Estimate decoded byte length of a base64 string without decoding it."""
    s = (s or "").strip()
    if not s:
        return 0

    padding = 0
    if s.endswith("=="):
        padding = 2
    elif s.endswith("="):
        padding = 1

    # base64 expands 3 bytes -> 4 chars
    return max(0, (len(s) * 3) // 4 - padding)


def require_blob(obj: dict[str, Any], key: str, *, max_bytes: int) -> bytes:
    encoded = require_str(obj, key)
    if estimate_b64_decoded_bytes(encoded) > max_bytes:
        raise DecodeError(f"field '{key}' exceeds {max_bytes} bytes")
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"field '{key}' is not valid base64: {exc}") from exc


def encode_blob(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def exactly_one_outcome(obj: dict[str, Any], *, success: bool, result_key: str, error_key: str) -> tuple[str | None, str | None]:
    """Read the result/error pair of a response; exactly one must be present."""
    has_result = obj.get(result_key) is not None
    has_error = obj.get(error_key) is not None
    if has_result and has_error:
        raise DecodeError(f"response carries both '{result_key}' and '{error_key}'")
    if success:
        if not has_result:
            raise DecodeError(f"successful response missing '{result_key}'")
        return require_str(obj, result_key), None
    if not has_error:
        raise DecodeError(f"failed response missing '{error_key}'")
    return None, require_str(obj, error_key)


__all__ = [
    "encode_blob",
    "estimate_b64_decoded_bytes",
    "exactly_one_outcome",
    "optional_str",
    "require_blob",
    "require_bool",
    "require_number",
    "require_object",
    "require_str",
]
