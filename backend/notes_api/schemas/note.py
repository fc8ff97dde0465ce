"""
Notes Functions Backend - Pydantic Response Schemas
=====================================================

What:  Pydantic models defining the JSON bodies the endpoints return.
How:   FastAPI serializes handler results through these models and uses them
       for the OpenAPI document. Summary responses are emitted with
       `response_model_exclude_none`, so `mocked` only appears on the mock path.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteListResponse(BaseModel):
    """
    What:  Every note of the authenticated user.
    Who:   Returned by /getUserNotes.

    Each item is the stored document: its id plus whatever fields the client
    application wrote. Order is the store's order; nothing is sorted.
    """
    notes: List[Dict[str, Any]] = Field(description="Notes as {id, ...fields}")


class SummaryResponse(BaseModel):
    """
    What:  One-sentence summary of a single note.
    Who:   Returned by /summarizeNote.
    """
    id: str = Field(description="Id of the summarized note")
    summary: str = Field(description="One-sentence summary")
    mocked: Optional[bool] = Field(
        default=None,
        description="True when produced by the local mock summarizer; omitted otherwise",
    )


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body of /summarizeNote.

    Example:
        {"error": "Failed to summarize", "details": "{\\"error\\": {...}}"}
    """
    error: str = Field(description="Human-readable error description")
    details: Optional[str] = Field(
        default=None,
        description="Raw upstream error body (502 only)",
    )
