"""External collaborator interfaces (engines and note store)."""

from .store import NoteStore
from .summarizer import Summarizer
from .transcriber import Transcriber

__all__ = ["NoteStore", "Summarizer", "Transcriber"]
