"""Local note store interface (persistence lives outside this package)."""

from __future__ import annotations

from typing import Protocol

from notelink.state.notes import Note


class NoteStore(Protocol):
    def create(self, content: str, *, title: str = "", was_voice_input: bool = False) -> Note: ...

    def get(self, note_id: str) -> Note | None: ...

    def delete(self, note_id: str) -> None: ...

    def update_summary(self, note_id: str, summary: str, generated_at: float) -> None: ...


__all__ = ["NoteStore"]
