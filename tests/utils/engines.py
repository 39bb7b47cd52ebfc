"""Scripted engines: fixed output, optional failure, optional gate to hold a call open."""

from __future__ import annotations

import asyncio

from notelink.state.connection import CapabilityStatus


class FakeSummarizer:
    def __init__(
        self,
        *,
        available: bool = True,
        status_text: str = "Ready",
        summary: str = "A short summary.",
        error: Exception | None = None,
    ) -> None:
        self.available = available
        self.status_text = status_text
        self.summary = summary
        self.error = error
        self.gate: asyncio.Event | None = None
        self.calls: list[str] = []

    def check_availability(self) -> CapabilityStatus:
        return CapabilityStatus(capability_available=self.available, status_text=self.status_text)

    async def summarize(self, text: str) -> str:
        self.calls.append(text)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.summary


class FakeTranscriber:
    def __init__(self, *, text: str = "hello from the wrist", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.gate: asyncio.Event | None = None
        self.calls: list[bytes] = []

    def check_availability(self) -> CapabilityStatus:
        return CapabilityStatus(capability_available=True, status_text="Ready")

    async def transcribe(self, audio: bytes) -> str:
        self.calls.append(audio)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.text


__all__ = ["FakeSummarizer", "FakeTranscriber"]
