"""
Notes Functions Backend - Dependency Wiring
=============================================

What:  FastAPI dependencies that hand configuration and adapters to routes.
How:   The adapters are cached for the life of the process. They create the
       Firebase app and the Firestore client on their first call, inside the
       route body, never while FastAPI resolves dependencies. Tests replace
       any of these through `app.dependency_overrides`.
"""

from functools import lru_cache

from fastapi import Depends
from firebase_admin import App

from notes_api.config import Settings, settings
from notes_api.services.base import IdentityVerifier, NoteStore, SummarizerBackend
from notes_api.services.firebase_service import (
    FirebaseIdentityVerifier,
    FirestoreNoteStore,
    initialize_firebase,
)
from notes_api.services.note_service import NoteService
from notes_api.services.openai_service import OpenAISummarizer


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def _firebase_app() -> App:
    return initialize_firebase(settings)


@lru_cache(maxsize=1)
def get_identity_verifier() -> IdentityVerifier:
    return FirebaseIdentityVerifier(app_factory=_firebase_app)


@lru_cache(maxsize=1)
def get_note_store() -> NoteStore:
    return FirestoreNoteStore.from_app(_firebase_app)


def get_summarizer_backend(
    settings: Settings = Depends(get_settings),
) -> SummarizerBackend:
    return OpenAISummarizer(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )


def get_note_service(
    settings: Settings = Depends(get_settings),
    store: NoteStore = Depends(get_note_store),
    live_backend: SummarizerBackend = Depends(get_summarizer_backend),
) -> NoteService:
    return NoteService(settings=settings, store=store, live_backend=live_backend)
