"""Failure codes of the external engines."""

from __future__ import annotations

# Summarizer
SUMMARY_AI_UNAVAILABLE = "aiUnavailable"
SUMMARY_TOO_SHORT = "tooShort"
SUMMARY_GENERATION_FAILED = "generationFailed"

# Transcriber
RECOGNITION_NOT_AUTHORIZED = "notAuthorized"
RECOGNITION_UNAVAILABLE = "recognizerUnavailable"
RECOGNITION_AUDIO_ERROR = "audioError"
RECOGNITION_FAILED = "recognitionFailed"
RECOGNITION_NO_RESULT = "noResult"
RECOGNITION_EMPTY_RESULT = "emptyResult"

SUMMARY_CODES = frozenset({SUMMARY_AI_UNAVAILABLE, SUMMARY_TOO_SHORT, SUMMARY_GENERATION_FAILED})
RECOGNITION_CODES = frozenset(
    {
        RECOGNITION_NOT_AUTHORIZED,
        RECOGNITION_UNAVAILABLE,
        RECOGNITION_AUDIO_ERROR,
        RECOGNITION_FAILED,
        RECOGNITION_NO_RESULT,
        RECOGNITION_EMPTY_RESULT,
    }
)

__all__ = [
    "RECOGNITION_AUDIO_ERROR",
    "RECOGNITION_CODES",
    "RECOGNITION_EMPTY_RESULT",
    "RECOGNITION_FAILED",
    "RECOGNITION_NOT_AUTHORIZED",
    "RECOGNITION_NO_RESULT",
    "RECOGNITION_UNAVAILABLE",
    "SUMMARY_AI_UNAVAILABLE",
    "SUMMARY_CODES",
    "SUMMARY_GENERATION_FAILED",
    "SUMMARY_TOO_SHORT",
]
