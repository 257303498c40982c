"""
Notes API — Notes Route Handlers
=================================

What:  CRUD and listing endpoints for notes under /api/notes.
How:   Extracts path/query/body values, delegates to NoteService, sets
       status codes and headers. No note rules live here.

Endpoints:
    POST   /api/notes          → 201, Location header
    GET    /api/notes          → 200, X-Total-Count header
    GET    /api/notes/{id}     → 200 | 404
    PUT    /api/notes/{id}     → 200 | 400 | 404
    DELETE /api/notes/{id}     → 204 | 404
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.config import settings
from notes_api.database import get_db_session
from notes_api.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from notes_api.services.note_service import note_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Notes"])


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid title or content", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    body: NoteCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """Create a note; the Location header points at GET /api/notes/{id}."""
    note = await note_service.create_note(db, title=body.title, content=body.content)
    response.headers["Location"] = f"{router.prefix}/notes/{note.id}"
    return note


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses={
        200: {"description": "One page of notes", "model": NoteListResponse},
        400: {"description": "Invalid sort or dir", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List notes with filtering, sorting and pagination",
    description=(
        "Returns one page of notes. `q` filters by case-insensitive substring on "
        "title or content. `page` and `pageSize` are clamped (page >= 1, "
        "1 <= pageSize <= 100). `sort` is one of id, title, created, updated and "
        "`dir` is asc or desc; other values are rejected. The total number of "
        "matching notes is returned in the body and in X-Total-Count."
    ),
)
async def list_notes(
    response: Response,
    q: Optional[str] = Query(
        default=None,
        description="Case-insensitive text to find in title or content",
    ),
    page: int = Query(default=1, description="1-based page index"),
    page_size: Optional[int] = Query(
        default=None,
        alias="pageSize",
        description="Items per page (max 100)",
    ),
    sort: str = Query(
        default="updated",
        description="Sort key: id, title, created (createdAt), updated (updatedAt)",
    ),
    dir: str = Query(
        default="desc",
        description="Sort direction: asc or desc",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> NoteListResponse:
    """
    List notes.

    Example:
        GET /api/notes?q=shop&page=2&pageSize=20&sort=title&dir=asc
    """
    result = await note_service.list_notes(
        db,
        q=q,
        page=page,
        page_size=settings.default_page_size if page_size is None else page_size,
        sort=sort,
        direction=dir,
    )

    # Also exposed by CORS so browser clients can read it
    response.headers["X-Total-Count"] = str(result.total)
    return result


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid title or content", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: int,
    body: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(
        db, note_id, title=body.title, content=body.content
    )


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Delete a note.

    A second DELETE for the same id answers 404; clients that want
    idempotent deletes treat 404 as success.
    """
    await note_service.delete_note(db, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
