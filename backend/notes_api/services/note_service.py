"""
Notes API — Note Service (Lifecycle Operations + Listing)
==========================================================

What:  Create, fetch, update, delete and list notes.
How:   Each operation validates its input, then performs one short exchange
       with the record store through the session it was given.
Who:   Called by route handlers; calls the validation layer, the query
       engine and the database.

Operation Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Validate   │───▶│  Lifecycle / │───▶│  Store   │
    │          │    │  (fields or │    │  NoteQuery   │    │  (DB)    │
    └──────────┘    │   sort/dir) │    └──────────────┘    └──────────┘
                    └─────────────┘

Design Decision:
    NoteService is stateless. It receives the session (the store handle) on
    every call and holds no caches, locks or retries. Concurrent updates to
    the same note are last-writer-wins; an update racing a delete reports
    NotFoundError to whichever call sees the row missing.

Errors:
    ValidationError  bad input, raised before the store is touched
                     (update checks existence first, as documented below)
    NotFoundError    unknown id
    DatabaseError    any SQLAlchemy failure, logged and re-raised
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import DatabaseError, NotFoundError
from notes_api.models.note import ID_MAX, ID_MIN, Note, utcnow
from notes_api.schemas.note import NoteListResponse, NoteResponse
from notes_api.services.note_query import NoteQuery
from notes_api.services.validation import validate_note_fields

logger = logging.getLogger(__name__)


def _store_failure(action: str, exc: SQLAlchemyError, note_id: Optional[int] = None) -> DatabaseError:
    logger.error("Database error during %s (note_id=%s): %s", action, note_id, str(exc), exc_info=True)
    return DatabaseError(
        message=f"Could not {action}. Please try again.",
        context={"error_type": type(exc).__name__, "note_id": note_id},
    )


class NoteService:
    """
    Business logic layer for notes.

    Responsibilities:
        - create_note(): Validate and insert
        - get_note(): Single note retrieval with not-found handling
        - update_note(): Replace title/content, stamp updated_at
        - delete_note(): Hard delete
        - list_notes(): Filtered, ordered, offset-paginated listing
    """

    async def _load(self, db: AsyncSession, note_id: int, action: str) -> Note:
        # No stored row can carry an id the column cannot represent
        if not ID_MIN <= note_id <= ID_MAX:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise _store_failure(action, e, note_id) from e

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note

    async def create_note(
        self,
        db: AsyncSession,
        title: Optional[str],
        content: Optional[str] = None,
    ) -> NoteResponse:
        """
        Validate and store a new note.

        The store assigns the id on flush; created_at is stamped now and
        updated_at stays empty.

        Args:
            db: Async database session
            title: Raw title (required)
            content: Raw content (optional, defaults to "")

        Returns:
            NoteResponse including the assigned id

        Raises:
            ValidationError: title missing/blank/too long, or content too long
            DatabaseError: Insert failed
        """
        fields = validate_note_fields(title, content)

        note = Note(
            title=fields.title,
            content=fields.content,
            created_at=utcnow(),
            updated_at=None,
        )
        try:
            db.add(note)
            await db.flush()  # Assigns the id without committing the transaction
        except SQLAlchemyError as e:
            raise _store_failure("create the note", e) from e

        logger.info("Note %s created", note.id)
        return NoteResponse.model_validate(note)

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: No note with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        note = await self._load(db, note_id, "retrieve the note")
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        title: Optional[str],
        content: Optional[str] = None,
    ) -> NoteResponse:
        """
        Replace a note's title and content.

        Existence is checked first, so an unknown id reports NotFoundError
        even when the input is also invalid. updated_at is refreshed on every
        call and never set earlier than created_at.

        Raises:
            NotFoundError: No note with this id
            ValidationError: Same rules as create_note
            DatabaseError: Query or update failed
        """
        note = await self._load(db, note_id, "update the note")
        fields = validate_note_fields(title, content)

        now = utcnow()
        note.title = fields.title
        note.content = fields.content
        note.updated_at = now if now >= note.created_at else note.created_at

        try:
            await db.flush()
        except SQLAlchemyError as e:
            raise _store_failure("update the note", e, note_id) from e

        logger.info("Note %s updated", note_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        """
        Permanently remove a note.

        Deleting an id that is already gone raises NotFoundError again and
        changes nothing, so callers that treat NotFoundError as success get
        idempotent deletes.

        Raises:
            NotFoundError: No note with this id
            DatabaseError: Query or delete failed
        """
        note = await self._load(db, note_id, "delete the note")
        try:
            await db.delete(note)
            await db.flush()
        except SQLAlchemyError as e:
            raise _store_failure("delete the note", e, note_id) from e

        logger.info("Note %s deleted", note_id)

    async def list_notes(
        self,
        db: AsyncSession,
        q: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
        sort: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> NoteListResponse:
        """
        List notes with an optional filter, ordering and offset pagination.

        Steps:
            1. Validate sort/dir and clamp page/page_size (no store access yet)
            2. COUNT matching notes (filter applied, page window not)
            3. SELECT the page ordered by the sort key, then id

        Args:
            db: Async database session
            q: Case-insensitive substring to find in title or content
            page: 1-based page index (values below 1 become 1)
            page_size: Items per page (clamped to 1..100)
            sort: id | title | created | updated (aliases createdAt, updatedAt)
            direction: asc | desc

        Returns:
            NoteListResponse with the page items, the pre-paging total and
            the page/page_size actually used

        Raises:
            ValidationError: Unknown sort key or direction
            DatabaseError: Query execution failed
        """
        query = NoteQuery.from_params(
            filter_text=q,
            page=page,
            page_size=page_size,
            sort=sort,
            direction=direction,
        )

        try:
            total = (await db.execute(query.count_statement())).scalar_one()
            result = await db.execute(query.page_statement())
            notes = list(result.scalars().all())
        except SQLAlchemyError as e:
            raise _store_failure("retrieve notes", e) from e

        logger.debug(
            "Listed %d of %d notes (page=%d size=%d sort=%s %s)",
            len(notes), total, query.page, query.page_size,
            query.sort_key.value, query.direction.value,
        )

        return NoteListResponse(
            items=[NoteResponse.model_validate(note) for note in notes],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
