"""
Notes Functions Backend - Firebase Adapters
=============================================

What:  Firebase Authentication verifier and Firestore note store.
How:   The Firebase Admin SDK is synchronous; each call runs in Starlette's
       threadpool so the event loop stays free while waiting on Google APIs.
Who:   Wired by `notes_api.dependencies`; never imported by tests that use
       fakes.

Credentials:
    With FIREBASE_SERVICE_ACCOUNT set, the service-account JSON is used.
    Otherwise the SDK falls back to Application Default Credentials, which is
    what the hosted runtime and the local emulator suite provide.
"""

import base64
import datetime
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

import firebase_admin
from firebase_admin import App, auth, credentials, firestore
from google.cloud.firestore_v1 import DocumentReference, GeoPoint
from starlette.concurrency import run_in_threadpool

from notes_api.config import Settings
from notes_api.services.base import IdentityVerifier, NoteDocument, NoteStore

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
NOTES_COLLECTION = "notes"


def _normalize_service_account(path: str) -> Path:
    candidate = Path(path).expanduser()
    if not candidate.is_file():
        raise FileNotFoundError(f"Service account key not found: {candidate}")
    return candidate


def initialize_firebase(settings: Settings, *, app_name: Optional[str] = None) -> App:
    """Initialise a Firebase Admin app if one has not already been created."""

    name = app_name or firebase_admin._DEFAULT_APP_NAME  # type: ignore[attr-defined]
    try:
        return firebase_admin.get_app(name)
    except ValueError:
        cred = None
        if settings.firebase_service_account:
            cred = credentials.Certificate(
                _normalize_service_account(settings.firebase_service_account)
            )
        options: Optional[Mapping[str, Any]] = None
        if settings.firebase_project_id:
            options = {"projectId": settings.firebase_project_id}
        logger.info(
            "Initializing Firebase app %s (emulator=%s)",
            name,
            settings.is_emulator,
        )
        return firebase_admin.initialize_app(cred, options, name=name)


def to_json_value(value: Any) -> Any:
    """
    Convert Firestore field values into JSON-serializable equivalents.

    Timestamps become ISO-8601 strings, references their document path,
    geo points a latitude/longitude mapping and bytes base64 text.
    """
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if isinstance(value, DocumentReference):
        return value.path
    if isinstance(value, GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, Mapping):
        return {key: to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    return value


def snapshot_to_note(snapshot: Any) -> NoteDocument:
    """Map a document snapshot to {"id": ..., **fields}."""
    data = snapshot.to_dict() or {}
    return {"id": snapshot.id, **to_json_value(data)}


class FirebaseIdentityVerifier(IdentityVerifier):
    """
    Verifies Firebase ID tokens with the Admin SDK.

    With `app_factory`, the Firebase app is created on the first
    verification, inside the worker thread; a failure there is raised from
    `verify_token` like any rejected token.
    """

    def __init__(
        self,
        app: Optional[App] = None,
        *,
        app_factory: Optional[Callable[[], Optional[App]]] = None,
    ):
        self._app = app
        self._app_factory = app_factory

    @property
    def app(self) -> Optional[App]:
        if self._app is None and self._app_factory is not None:
            self._app = self._app_factory()
        return self._app

    def _verify(self, token: str) -> Dict[str, Any]:
        return auth.verify_id_token(token, app=self.app)

    async def verify_token(self, token: str) -> str:
        decoded = await run_in_threadpool(self._verify, token)
        return str(decoded.get("uid") or "")


class FirestoreNoteStore(NoteStore):
    """
    Reads notes from `users/{uid}/notes` in Cloud Firestore.

    The client is either given directly or built by `client_factory` on the
    first read, inside the worker thread of that read.
    """

    def __init__(
        self,
        client: Any = None,
        *,
        client_factory: Optional[Callable[[], Any]] = None,
    ):
        if client is None and client_factory is None:
            raise ValueError("FirestoreNoteStore needs a client or a client_factory")
        self._client = client
        self._client_factory = client_factory

    @classmethod
    def from_app(
        cls, app_factory: Callable[[], Optional[App]] = lambda: None
    ) -> "FirestoreNoteStore":
        """Store whose client is `firestore.client(app=app_factory())`, built lazily."""
        return cls(client_factory=lambda: firestore.client(app=app_factory()))

    @property
    def client(self) -> Any:
        if self._client is None:
            # firestore.client() returns the same client for a given app
            self._client = self._client_factory()
        return self._client

    def _notes(self, uid: str) -> Any:
        return (
            self.client.collection(USERS_COLLECTION)
            .document(uid)
            .collection(NOTES_COLLECTION)
        )

    async def list_notes(self, uid: str) -> List[NoteDocument]:
        snapshots = await run_in_threadpool(lambda: self._notes(uid).get())
        notes = [snapshot_to_note(snapshot) for snapshot in snapshots]
        logger.info("Listed %d notes for uid=%s", len(notes), uid)
        return notes

    async def get_note(self, uid: str, note_id: str) -> Optional[NoteDocument]:
        snapshot = await run_in_threadpool(
            lambda: self._notes(uid).document(note_id).get()
        )
        if not snapshot.exists:
            return None
        return snapshot_to_note(snapshot)
