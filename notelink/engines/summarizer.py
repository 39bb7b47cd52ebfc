"""Summarization engine interface consumed by the responding peer."""

from __future__ import annotations

from typing import Protocol

from notelink.state.connection import CapabilityStatus


class Summarizer(Protocol):
    def check_availability(self) -> CapabilityStatus:
        """Re-poll engine readiness."""
        ...

    async def summarize(self, text: str) -> str:
        """Return a short summary; raise ``SummarizationError`` on failure."""
        ...


__all__ = ["Summarizer"]
