"""Pairing-key check for the WebSocket peer link."""

from __future__ import annotations

import hmac

from fastapi import WebSocket

from notelink.config.link import PAIRING_HEADER, PAIRING_QUERY_PARAM


def get_presented_key(ws: WebSocket) -> str:
    """Pairing key offered by the connecting peer; the query param wins over the header."""
    for candidate in (ws.query_params.get(PAIRING_QUERY_PARAM), ws.headers.get(PAIRING_HEADER)):
        key = (candidate or "").strip()
        if key:
            return key
    return ""


def validate_pairing_key(presented: str, expected: str) -> bool:
    # An unpaired host accepts nobody.
    if not expected or not presented:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


async def authenticate_websocket(ws: WebSocket, *, expected_pairing_key: str) -> bool:
    return validate_pairing_key(get_presented_key(ws), expected_pairing_key)


__all__ = ["authenticate_websocket", "get_presented_key", "validate_pairing_key"]
