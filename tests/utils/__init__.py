"""Test helpers.

Focused modules:
- engines.py: scripted summarizer and transcriber
- store.py: in-memory note store
- peers.py: loopback-connected peer runtimes and polling helpers
"""

from __future__ import annotations

from .store import MemoryNoteStore
from .engines import FakeSummarizer, FakeTranscriber
from .peers import PeerPair, make_settings, next_envelope, start_pair, wait_until

__all__ = [
    "FakeSummarizer",
    "FakeTranscriber",
    "MemoryNoteStore",
    "PeerPair",
    "make_settings",
    "next_envelope",
    "start_pair",
    "wait_until",
]
