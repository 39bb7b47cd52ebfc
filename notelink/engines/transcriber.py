"""Speech-to-text engine interface consumed by the responding peer."""

from __future__ import annotations

from typing import Protocol

from notelink.state.connection import CapabilityStatus


class Transcriber(Protocol):
    def check_availability(self) -> CapabilityStatus:
        """Re-poll recognizer readiness."""
        ...

    async def transcribe(self, audio: bytes) -> str:
        """Return recognized text; raise ``RecognitionError`` on failure."""
        ...


__all__ = ["Transcriber"]
