"""
Notes Functions Backend - Test Configuration (conftest.py)
============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   In-memory fakes stand in for Firebase Auth, Firestore and OpenAI, and
       are injected into the app through FastAPI's dependency_overrides.

Fixture Hierarchy (all function-scoped):
    ├── make_settings:   Builds isolated Settings instances
    ├── app_settings:    Settings used by the test client (live key configured)
    ├── fake_verifier:   Token → uid table ("abc" → "user-1", "other" → "user-2")
    ├── note_store:      Notes of user-1 and user-2
    ├── live_backend:    Recording summarizer for the live path
    ├── use_settings:    Swap the client's Settings mid-test
    └── test_client:     HTTPX AsyncClient bound to the app
"""

import os
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep the developer's environment out of the tests
for _var in (
    "OPENAI_API_KEY",
    "openai_key",
    "OPENAI_KEY",
    "USE_MOCK_OPENAI",
    "FUNCTIONS_EMULATOR",
    "FIREBASE_AUTH_EMULATOR_HOST",
    "FIRESTORE_EMULATOR_HOST",
):
    os.environ.pop(_var, None)
os.environ["LOG_LEVEL"] = "WARNING"

from notes_api.config import Settings  # noqa: E402
from notes_api.dependencies import (  # noqa: E402
    get_identity_verifier,
    get_note_store,
    get_settings,
    get_summarizer_backend,
)
from notes_api.services.base import (  # noqa: E402
    IdentityVerifier,
    NoteDocument,
    NoteStore,
    SummarizerBackend,
)


# ══════════════════════════════════════════════════════════════════════════
# Fakes
# ══════════════════════════════════════════════════════════════════════════

class FakeIdentityVerifier(IdentityVerifier):
    """Accepts only the tokens it was given."""

    def __init__(self, tokens: Dict[str, str]):
        self.tokens = tokens
        self.calls: List[str] = []

    async def verify_token(self, token: str) -> str:
        self.calls.append(token)
        if token not in self.tokens:
            raise ValueError("Decoding Firebase ID token failed")
        return self.tokens[token]


class InMemoryNoteStore(NoteStore):
    """Notes keyed by uid, then by note id. `error` makes every call fail."""

    def __init__(
        self,
        notes: Dict[str, Dict[str, Dict[str, Any]]],
        error: Optional[Exception] = None,
    ):
        self.notes = notes
        self.error = error

    async def list_notes(self, uid: str) -> List[NoteDocument]:
        if self.error:
            raise self.error
        return [{"id": note_id, **data} for note_id, data in self.notes.get(uid, {}).items()]

    async def get_note(self, uid: str, note_id: str) -> Optional[NoteDocument]:
        if self.error:
            raise self.error
        data = self.notes.get(uid, {}).get(note_id)
        if data is None:
            return None
        return {"id": note_id, **data}


class RecordingSummarizer(SummarizerBackend):
    """Live-path stand-in that records every text it is asked to summarize."""

    def __init__(self, summary: str = "A short live summary.", error: Optional[Exception] = None):
        self.summary = summary
        self.error = error
        self.calls: List[str] = []

    async def summarize(self, text: str) -> str:
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.summary


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_settings():
    """Build Settings from keyword overrides only (no .env file)."""

    def _make(**overrides: Any) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def app_settings(make_settings) -> Settings:
    return make_settings(openai_api_key="sk-test")


@pytest.fixture
def fake_verifier() -> FakeIdentityVerifier:
    return FakeIdentityVerifier({"abc": "user-1", "other": "user-2"})


@pytest.fixture
def note_store() -> InMemoryNoteStore:
    return InMemoryNoteStore(
        {
            "user-1": {
                "n1": {"content": "Buy milk. Then call mom.", "title": "Errands"},
                "n2": {"text": "Meeting at noon!"},
                "empty": {"title": "No text here"},
            },
            "user-2": {
                "secret": {"body": "Someone else's note."},
            },
        }
    )


@pytest.fixture
def live_backend() -> RecordingSummarizer:
    return RecordingSummarizer()


@pytest.fixture
def app():
    from notes_api.main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def use_settings(app, make_settings):
    """Replace the Settings seen by request handlers."""

    def _use(**overrides: Any) -> Settings:
        configured = make_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: configured
        return configured

    return _use


@pytest_asyncio.fixture
async def test_client(app, app_settings, fake_verifier, note_store, live_backend):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_hello(test_client):
            response = await test_client.get("/helloWorld")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_settings] = lambda: app_settings
    app.dependency_overrides[get_identity_verifier] = lambda: fake_verifier
    app.dependency_overrides[get_note_store] = lambda: note_store
    app.dependency_overrides[get_summarizer_backend] = lambda: live_backend

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
