"""
Notes Functions Backend - Greeting Route
==========================================

What:  Liveness endpoint answering with a fixed plaintext greeting.
Who:   Smoke tests and uptime probes.
How:   No auth, no inputs, no dependencies; always 200.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from notes_api.routes import ALL_METHODS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

GREETING = "Hello from Firebase!"


@router.api_route(
    "/helloWorld",
    methods=ALL_METHODS,
    response_class=PlainTextResponse,
    summary="Liveness greeting",
)
async def hello_world() -> PlainTextResponse:
    logger.info("Hello logs!")
    return PlainTextResponse(GREETING)
