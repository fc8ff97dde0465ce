"""
Notes Functions Backend - Notes Route Handlers
================================================

What:  /getUserNotes (list the caller's notes) and /summarizeNote (summarize one).
How:   Authenticate the bearer token, delegate to NoteService, shape the reply.
Who:   Called by the notes client application with a Firebase ID token.

Error shapes differ between the two endpoints:
    /getUserNotes   any failure → 401 text/plain "Unauthorized"
    /summarizeNote  400/401/404/500/502 JSON {"error": ...} via the global
                    exception handlers in main.py
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from notes_api.auth import authenticate
from notes_api.dependencies import get_identity_verifier, get_note_service
from notes_api.routes import ALL_METHODS
from notes_api.schemas.note import ErrorResponse, NoteListResponse, SummaryResponse
from notes_api.services.base import IdentityVerifier
from notes_api.services.note_service import NoteService, parse_note_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


async def read_json_body(request: Request) -> Any:
    """Parsed JSON body, or None when the body is empty or not JSON."""
    if not await request.body():
        return None
    try:
        return await request.json()
    except ValueError:
        logger.debug("Ignoring non-JSON request body")
        return None


@router.api_route(
    "/getUserNotes",
    methods=ALL_METHODS,
    response_model=NoteListResponse,
    responses={401: {"description": "Unauthorized (text/plain)"}},
    summary="List the caller's notes",
)
async def get_user_notes(
    request: Request,
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    service: NoteService = Depends(get_note_service),
) -> Response:
    """
    Return every document under `users/{uid}/notes`.

    Authentication and store failures look the same to
    the caller: both answer 401 "Unauthorized", the detail goes to the log.
    """
    logger.info("Get user notes function triggered")
    try:
        uid = await authenticate(request.headers, verifier, operation="getUserNotes")
        notes = await service.list_notes(uid)
        # Serialize here so unencodable field values also answer 401
        return JSONResponse(jsonable_encoder(NoteListResponse(notes=notes)))
    except Exception as e:
        logger.error("getUserNotes error: %s", str(e.__cause__ or e))
        return PlainTextResponse("Unauthorized", status_code=401)


@router.api_route(
    "/summarizeNote",
    methods=ALL_METHODS,
    response_model=SummaryResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Missing note id or note without text", "model": ErrorResponse},
        401: {"description": "Unauthorized", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Key not configured or internal error", "model": ErrorResponse},
        502: {"description": "Summarization API failed", "model": ErrorResponse},
    },
    summary="Summarize one note in one sentence",
)
async def summarize_note(
    request: Request,
    note_id_param: Optional[str] = Query(
        default=None,
        alias="id",
        description="Note id; falls back to the `id` field of a JSON body",
    ),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    service: NoteService = Depends(get_note_service),
) -> SummaryResponse:
    """
    Summarize the caller's note `id`.

    Steps: parse id (400 before any auth) → authenticate (401) → fetch (404)
    → validate text (400) → mock or live summary (500/502 on failure).
    """
    logger.info("summarizeNote triggered")

    body = None if note_id_param else await read_json_body(request)
    note_id = parse_note_id(note_id_param, body)

    uid = await authenticate(request.headers, verifier, operation="summarizeNote")

    return await service.summarize_note(uid, note_id)
