"""
Notes Functions Backend - Custom Exception Hierarchy
======================================================

What:  Application-specific exceptions for each failure the handlers report.
How:   Each exception carries a caller-visible message, an HTTP status code
       and an optional context dict. Global exception handlers (registered in
       main.py) turn them into JSON error bodies; the context is logged
       server-side only.
Who:   Raised by auth helpers, services and adapters; caught by main.py.

Exception Hierarchy:
    NotesApiError (base)
    ├── ValidationError            → 400 Bad Request
    ├── AuthenticationError        → 401 Unauthorized
    │   └── MissingCredentialError → 401 Unauthorized
    ├── NotFoundError              → 404 Not Found
    ├── MisconfigurationError      → 500 Internal Server Error
    ├── InternalError              → 500 Internal Server Error
    └── BackendUnavailableError    → 502 Bad Gateway

Caller-visible bodies are terse for authentication (a malformed header and a
rejected token look identical) and descriptive for validation, not-found and
backend failures.
"""

from typing import Any, Dict, Optional


class NotesApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:     User-facing error description (returned as `error`)
        context:     Additional debug info (logged but NOT returned to client)
        status_code: HTTP status used by the global exception handler
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Internal error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        """JSON body sent to the client."""
        return {"error": self.message}


class ValidationError(NotesApiError):
    """
    Raised when the request or the stored note cannot be processed.

    When:    Missing note id, note without a text field.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(NotesApiError):
    """
    Raised when the caller's identity cannot be established.

    When:    Token rejected by the identity provider, or any failure during
             verification.
    HTTP:    401 Unauthorized, body always {"error": "Unauthorized"}.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MissingCredentialError(AuthenticationError):
    """No `Authorization: Bearer <token>` header on the request."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(context=context)
        # Detail for logs; the client still sees "Unauthorized"
        self.reason = "Missing or invalid Authorization header"

    def __str__(self) -> str:
        return self.reason


class NotFoundError(NotesApiError):
    """
    Raised when a requested document does not exist.

    When:    /summarizeNote with an id that has no document under the caller.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class MisconfigurationError(NotesApiError):
    """
    Raised when the process lacks configuration required for a request.

    When:    Live summarization requested but no API key is configured.
    HTTP:    500 Internal Server Error
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Service is not configured",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalError(NotesApiError):
    """
    Wraps unexpected failures (store access, malformed backend payloads).

    HTTP:    500 Internal Server Error, body {"error": "Internal error"}.
    The original exception is kept in `context` for the logs.
    """

    status_code = 500

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Internal error", context=context)


class BackendUnavailableError(NotesApiError):
    """
    Raised when the summarization API answers with a non-success status.

    HTTP:    502 Bad Gateway
    Body:    {"error": "Failed to summarize", "details": <raw upstream body>}

    No retry is attempted; the failure is surfaced immediately.
    """

    status_code = 502

    def __init__(
        self,
        upstream_status: int,
        details: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["upstream_status"] = upstream_status
        super().__init__(message="Failed to summarize", context=ctx)
        self.upstream_status = upstream_status
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}
