"""Deterministic, dependency-free stand-in for the live summarization API."""

import re
from typing import Any

from notes_api.services.base import SummarizerBackend

EMPTY_NOTE_SUMMARY = "(Nota vacía)"
SUMMARY_LABEL = "Resumen: "
MAX_SEGMENT_LENGTH = 240
ELLIPSIS = "…"

_WHITESPACE_RUN = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")


def mock_summarize(text: Any) -> str:
    """
    Return the first sentence of `text`, labelled as a summary.

    The text is trimmed and its whitespace runs collapsed. A first segment
    longer than 240 characters is clipped and marked with an ellipsis. Empty
    input yields the fixed "empty note" string.
    """
    normalized = _WHITESPACE_RUN.sub(" ", str(text or "").strip())
    if not normalized:
        return EMPTY_NOTE_SUMMARY

    first_sentence = _SENTENCE_BREAK.split(normalized)[0] or normalized[:MAX_SEGMENT_LENGTH]
    if len(first_sentence) > MAX_SEGMENT_LENGTH:
        first_sentence = first_sentence[:MAX_SEGMENT_LENGTH] + ELLIPSIS
    return f"{SUMMARY_LABEL}{first_sentence}"


class MockSummarizer(SummarizerBackend):
    """`SummarizerBackend` wrapper around `mock_summarize`."""

    mocked = True

    async def summarize(self, text: str) -> str:
        return mock_summarize(text)


mock_summarizer = MockSummarizer()
