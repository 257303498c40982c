"""
Notes API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract between clients and backend.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation automatically.

Request bodies are deliberately loose (every field optional, no length
constraints): the note rules live in the service layer, which reports every
failing field at once with a 400 instead of FastAPI's schema-level 422.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/notes."""
    title: Optional[str] = Field(
        default=None,
        description="Required. 1-200 characters after trimming.",
        examples=["Shopping List"],
    )
    content: Optional[str] = Field(
        default=None,
        description="Optional. At most 4000 characters after trimming; defaults to empty.",
        examples=["milk, eggs, bread"],
    )


class NoteUpdate(NoteCreate):
    """Body of PUT /api/notes/{id}. Title and content are replaced wholesale."""


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a stored note.
    Who:   Returned by create, get, update, and as items of the listing.
    """
    id: int = Field(description="Store-assigned note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content (may be empty)")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="When the note was last updated (UTC); null if never updated"
    )

    model_config = {"from_attributes": True}


class NoteListResponse(BaseModel):
    """
    What:  One page of the filtered, sorted note listing.
    Who:   Returned by GET /api/notes.

    `total` counts every note matching the filter, independent of the page
    window, so clients can compute page counts. `page` and `page_size` echo
    the values actually used after clamping.
    """
    items: List[NoteResponse] = Field(description="Notes on this page, in order")
    total: int = Field(description="Number of notes matching the filter (before paging)")
    page: int = Field(description="1-based page index used")
    page_size: int = Field(description="Page size used (1-100)")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "invalid sort key",
            "details": {"field": "sort", "errors": [...]},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
