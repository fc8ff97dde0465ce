"""
Notes Functions Backend - Request ID Middleware
=================================================

What:  Assigns a correlation id to each request and echoes it in the response.
How:   Reuses the caller's X-Request-ID header when present, otherwise creates
       a short random id; stores it in a ContextVar for loggers and in
       `request.state` for handlers.
When:  Outermost middleware, so the access line and every handler log line
       of one invocation share the id.

Tracing across the client:
    The notes client may generate its own id before calling, attach it as
    X-Request-ID and quote it in bug reports; the same id then appears in
    the function logs.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# ── Context Variable ──────────────────────────────────────────────────────
# What: Coroutine-local storage for the current request id
# Concurrent requests on one event loop each see their own value.
# Alternative: threading.local, which is shared by every coroutine on a thread
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header when it is non-empty
        2. Otherwise generate 8 hex characters from a UUID4
        3. Store it in the ContextVar for the duration of the request
        4. Add it to the response headers, error responses included
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate the lines of one invocation
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        # Set/reset with a token: a warm instance serves many requests and
        # the id must not leak from one to the next
        token = request_id_var.set(rid)

        # Handlers read request.state; loggers read the ContextVar
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
