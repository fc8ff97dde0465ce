"""
Notes Functions Backend - Note Service (Business Logic Orchestrator)
======================================================================

What:  Orchestrates the note operations behind /getUserNotes and /summarizeNote.
How:   Composes a NoteStore and two SummarizerBackends (live and mock) and
       applies the request rules that do not depend on HTTP: note id parsing,
       text field priority and summarization path selection.
Who:   Built per request by `notes_api.dependencies.get_note_service`.

Summarize Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌────────────────┐
    │  Fetch   │───▶│  Validate   │───▶│  Select path │───▶│  Mock or Live  │
    │  (Store) │    │  text field │    │  (Settings)  │    │  summarizer    │
    └──────────┘    └─────────────┘    └──────────────┘    └────────────────┘

    Any step may short-circuit with an application exception; unexpected
    failures are logged and wrapped in InternalError. Nothing is retried.
"""

import logging
from typing import Any, List, Mapping, Optional

from notes_api.config import Settings
from notes_api.exceptions import (
    InternalError,
    MisconfigurationError,
    NotesApiError,
    NotFoundError,
    ValidationError,
)
from notes_api.schemas.note import SummaryResponse
from notes_api.services.base import NoteDocument, NoteStore, SummarizerBackend
from notes_api.services.mock_summarizer import mock_summarizer

logger = logging.getLogger(__name__)

# Checked in this order, first non-empty value wins
TEXT_FIELDS = ("content", "text", "body")


def parse_note_id(query_id: Optional[str], body: Any = None) -> str:
    """
    Resolve the note id from the query string, falling back to the body.

    The query parameter wins when non-empty. The body is consulted only when
    it is a JSON object. The result is trimmed.

    Raises:
        ValidationError: no usable id in either place.
    """
    raw: Any = query_id
    if not raw and isinstance(body, Mapping):
        raw = body.get("id")
    note_id = str(raw).strip() if raw else ""
    if not note_id:
        raise ValidationError(message="Missing note id", field="id")
    return note_id


def extract_note_text(data: Mapping[str, Any]) -> str:
    """Return the note's text from content, text or body; "" when none is set."""
    for field in TEXT_FIELDS:
        value = data.get(field)
        if value:
            return str(value)
    return ""


class NoteService:
    """
    Business logic layer for note operations.

    Args:
        settings:      Immutable configuration snapshot.
        store:         Where notes are read from.
        live_backend:  Summarizer used on the live path.
        mock_backend:  Summarizer used on the mock path.
    """

    def __init__(
        self,
        settings: Settings,
        store: NoteStore,
        live_backend: SummarizerBackend,
        mock_backend: SummarizerBackend = mock_summarizer,
    ):
        self.settings = settings
        self.store = store
        self.live_backend = live_backend
        self.mock_backend = mock_backend

    async def list_notes(self, uid: str) -> List[NoteDocument]:
        """Every note owned by `uid`, each tagged with its id."""
        return await self.store.list_notes(uid)

    def select_backend(self) -> SummarizerBackend:
        """
        Pick the summarizer for this request.

        Raises:
            MisconfigurationError: live path needed but no API key configured.
        """
        if self.settings.should_mock_summaries:
            return self.mock_backend
        if not self.settings.has_openai_key:
            raise MisconfigurationError(message="OpenAI API key not configured")
        return self.live_backend

    async def summarize_note(self, uid: str, note_id: str) -> SummaryResponse:
        """
        Fetch one note of `uid` and summarize it in one sentence.

        Raises:
            NotFoundError:           no document with that id (→ 404)
            ValidationError:         document has no text field (→ 400)
            MisconfigurationError:   no API key for the live path (→ 500)
            BackendUnavailableError: upstream answered non-2xx (→ 502)
            InternalError:           anything else (→ 500)
        """
        try:
            note = await self.store.get_note(uid, note_id)
            if note is None:
                raise NotFoundError(resource="Note", resource_id=note_id)

            text = extract_note_text(note)
            if not text:
                raise ValidationError(
                    message="Note has no text field (expected content/text/body)",
                    context={"note_id": note_id},
                )

            backend = self.select_backend()
            summary = await backend.summarize(text)

            if backend.mocked:
                logger.info("Mock summary for note %s", note_id)
                return SummaryResponse(id=note_id, summary=summary, mocked=True)
            return SummaryResponse(id=note_id, summary=summary)

        except NotesApiError:
            raise  # Already our exception, propagate as-is
        except Exception as e:
            logger.error("summarizeNote failure: %s", str(e), exc_info=True)
            raise InternalError(context={"error_type": type(e).__name__}) from e
