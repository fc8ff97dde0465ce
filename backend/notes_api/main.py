"""
Notes Functions Backend - FastAPI Application Factory
=======================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn notes_api.main:app`) and `python -m notes_api`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────┐ ┌─────────────────┐  │
    │  │  Req ID  │→│  Access log  │→│  CORS           │  │
    │  └──────────┘ └──────────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────────┐ ┌──────────────┐ ┌──────────────┐  │
    │  │ /helloWorld │ │ /getUserNotes│ │/summarizeNote│  │
    │  └─────────────┘ └──────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ 400 │ 401 │ 404 │ 500 │ 502 │ catch-all 500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, report configuration problems.
    Shutdown: log only; the process holds no connections of its own.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notes_api import __version__
from notes_api.config import settings
from notes_api.exceptions import (
    AuthenticationError,
    BackendUnavailableError,
    InternalError,
    MisconfigurationError,
    NotesApiError,
    NotFoundError,
    ValidationError,
)
from notes_api.middleware.logging import RequestLoggingMiddleware
from notes_api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from notes_api.routes import greeting, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout, which the hosting platform collects.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],  # the platform collects stdout
        force=True,  # replace uvicorn's handlers installed before startup
    )

    # Reduce noise from third-party libraries
    # httpx/httpcore log every request line at INFO; uvicorn.access duplicates
    # the line written by RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Cold-start initialization and shutdown logging."""
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Notes functions v%s starting up...", __version__)
    logger.info(
        "Emulator=%s, mock summaries=%s",
        settings.is_emulator,
        settings.should_mock_summaries,
    )

    # Warn, don't exit: /helloWorld, /getUserNotes and the mock path work
    # without a key, and /summarizeNote reports the problem as a 500
    for problem in settings.describe_problems():
        logger.warning("Configuration: %s", problem)

    yield  # Application serves requests here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Notes functions shutting down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(exc: NotesApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        ValidationError          → 400 {"error": message}
        AuthenticationError      → 401 {"error": "Unauthorized"}
        NotFoundError            → 404 {"error": "Note not found"}
        MisconfigurationError    → 500 {"error": message}
        InternalError            → 500 {"error": "Internal error"}
        BackendUnavailableError  → 502 {"error": "Failed to summarize", "details": raw}
        Exception (fallback)     → 500 {"error": "Internal error"}

    Exception context is logged here and never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(exc)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        # Detail was logged by notes_api.auth; the body stays opaque
        return _error_response(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s", rid, exc.context)
        return _error_response(exc)

    @app.exception_handler(MisconfigurationError)
    async def handle_misconfiguration(request: Request, exc: MisconfigurationError):
        rid = request_id_var.get("")
        logger.error("[%s] Misconfiguration: %s", rid, exc.message)
        return _error_response(exc)

    @app.exception_handler(BackendUnavailableError)
    async def handle_backend_unavailable(request: Request, exc: BackendUnavailableError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Summarization backend failed with status %d",
            rid,
            exc.upstream_status,
        )
        return _error_response(exc)

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        rid = request_id_var.get("")
        logger.error("[%s] Internal error | Context: %s", rid, exc.context)
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for truly unexpected errors; stack trace goes to the log only."""
        rid = request_id_var.get("")
        # Full stack trace in the log; the body never carries exception text
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Notes Functions API",
        description=(
            "HTTP functions in front of Firebase Authentication, Cloud Firestore "
            "and the OpenAI API: list a user's notes and summarize one of them."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → routes
    # (last added = first to execute)

    # CORS: the notes client calls from a browser origin
    # allow_credentials only with an explicit origin list; browsers reject
    # credentialed responses carrying "Access-Control-Allow-Origin: *"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],  # readable by client-side error reporting
    )

    # Access log: method, path, status, duration
    app.add_middleware(RequestLoggingMiddleware)

    # Request ID: outermost, so everything below sees the id
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(greeting.router)
    app.include_router(notes.router)

    return app


app = create_app()
