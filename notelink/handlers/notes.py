"""Applies successful summaries to the note they were requested for."""

from __future__ import annotations

import logging

from notelink.engines.store import NoteStore
from notelink.state.pending import RequestOutcome
from notelink.config.protocol import KIND_SUMMARIZE_REQUEST

logger = logging.getLogger(__name__)


class NoteSummaryApplier:
    """Completion callback that stores a summary on its note.

    Failed outcomes and transcriptions are ignored; a note deleted while its
    summary was pending is skipped.
    """

    def __init__(self, store: NoteStore) -> None:
        self._store = store

    def __call__(self, outcome: RequestOutcome) -> None:
        if outcome.kind != KIND_SUMMARIZE_REQUEST or not outcome.success:
            return
        if outcome.subject_id is None or outcome.result is None:
            return
        if self._store.get(outcome.subject_id) is None:
            logger.info("note %s gone before its summary arrived", outcome.subject_id)
            return
        self._store.update_summary(outcome.subject_id, outcome.result, outcome.completed_at)


__all__ = ["NoteSummaryApplier"]
