"""Note record as seen through the note store (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Note:
    id: str
    content: str
    created_at: float
    updated_at: float
    title: str = ""
    was_voice_input: bool = False
    summary: str | None = None
    summary_generated_at: float | None = None

    @property
    def has_summary(self) -> bool:
        return bool(self.summary)

    @property
    def is_summary_outdated(self) -> bool:
        if self.summary_generated_at is None:
            return False
        return self.updated_at > self.summary_generated_at


__all__ = ["Note"]
