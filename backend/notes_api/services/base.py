"""
Notes Functions Backend - Capability Interfaces
=================================================

What:  Abstract base classes for every external collaborator the handlers use.
How:   Concrete adapters (Firebase, Firestore, OpenAI, mock) inherit from these
       and are wired in `notes_api.dependencies`. Tests substitute in-memory
       fakes through FastAPI's `dependency_overrides`.
Who:   Called by `notes_api.auth` and `NoteService`.

Contracts:
    IdentityVerifier.verify_token(token) -> uid
    NoteStore.list_notes(uid)            -> [{"id": ..., **fields}, ...]
    NoteStore.get_note(uid, note_id)     -> {"id": ..., **fields} | None
    SummarizerBackend.summarize(text)    -> one-line summary
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

NoteDocument = Dict[str, Any]


class IdentityVerifier(ABC):
    """Resolves a bearer credential to a stable user id."""

    @abstractmethod
    async def verify_token(self, token: str) -> str:
        """
        Verify an ID token and return the uid it was issued for.

        Raises:
            Any exception when the token is malformed, expired, revoked or
            cannot be checked. Callers treat every failure the same way.
        """
        ...


class NoteStore(ABC):
    """
    Read-only access to the `users/{uid}/notes` collection.

    Documents are returned as plain dicts: the provider-assigned id under
    "id" followed by the stored fields (a stored "id" field wins).
    """

    @abstractmethod
    async def list_notes(self, uid: str) -> List[NoteDocument]:
        """All notes of `uid`, in provider order. Not paginated."""
        ...

    @abstractmethod
    async def get_note(self, uid: str, note_id: str) -> Optional[NoteDocument]:
        """One note of `uid`, or None when the document does not exist."""
        ...


class SummarizerBackend(ABC):
    """
    Abstract interface for one-sentence note summarization.

    Implementations:
        - OpenAISummarizer: live chat-completions call
        - MockSummarizer: deterministic first-sentence extraction, no I/O
    """

    #: Reported to the caller as `mocked: true` when set
    mocked: bool = False

    @abstractmethod
    async def summarize(self, text: str) -> str:
        """
        Summarize `text` in one sentence.

        Raises:
            BackendUnavailableError: the upstream API answered non-2xx.
        """
        ...
