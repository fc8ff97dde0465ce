# Middleware package init
"""
Notes Functions Backend - Middleware Package
==============================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    - Request ID runs first so every log line of the request, the access
      line included, carries the same correlation id.
    - The access log measures the full handler duration, outbound calls to
      Firebase and OpenAI included.
"""
