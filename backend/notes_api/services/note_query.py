"""
Notes API — Listing Query Engine
=================================

What:  Turns raw listing parameters into a filtered, ordered, paginated
       SELECT plus a matching COUNT.
How:   Parameters are validated and normalized into an immutable NoteQuery
       first; only then are SQLAlchemy statements built from it.
Who:   Used by NoteService.list_notes.

Pipeline:
    ┌──────────────┐   ┌───────────┐   ┌──────────────┐   ┌──────────────┐
    │ raw params   │──▶│ NoteQuery │──▶│ filter/count │──▶│ order + page │
    │ (q,page,...) │   │ (checked) │   │ (pre-paging) │   │ (id tiebreak)│
    └──────────────┘   └───────────┘   └──────────────┘   └──────────────┘

Ordering:
    id       Note.id
    title    Note.title
    created  Note.created_at
    updated  coalesce(Note.updated_at, Note.created_at)

    The requested direction applies to the primary key and to a trailing
    Note.id key, so equal primary values always come back in the same
    relative order and page boundaries stay stable.

    A note that was never updated sorts under "updated" by its creation
    time. No sentinel timestamp is substituted.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import Select, String, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from notes_api.models.note import Note
from notes_api.services.validation import (
    SortDirection,
    SortKey,
    clamp_page,
    clamp_page_size,
    validate_sort,
)


def normalize_filter(filter_text: Optional[str]) -> Optional[str]:
    """Trimmed, lower-cased search term, or None when there is nothing to match."""
    if filter_text is None:
        return None
    term = filter_text.strip().lower()
    return term or None


def sort_expression(sort_key: SortKey) -> ColumnElement:
    """Primary ORDER BY expression for a sort key."""
    if sort_key is SortKey.TITLE:
        return Note.title
    if sort_key is SortKey.CREATED:
        return Note.created_at
    if sort_key is SortKey.UPDATED:
        return func.coalesce(Note.updated_at, Note.created_at)
    return Note.id


@dataclass(frozen=True)
class NoteQuery:
    """
    A validated listing request.

    Instances only hold values that passed validation: sort key and
    direction are enum members, page and page size are already clamped,
    and the filter term is trimmed and lower-cased (None means no filter).
    """

    term: Optional[str]
    page: int
    page_size: int
    sort_key: SortKey
    direction: SortDirection

    @classmethod
    def from_params(
        cls,
        filter_text: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
        sort: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> "NoteQuery":
        """
        Validate and normalize raw listing parameters.

        Raises:
            ValidationError: sort or direction is outside the whitelist.
        """
        sort_key, sort_direction = validate_sort(sort, direction)
        return cls(
            term=normalize_filter(filter_text),
            page=clamp_page(page),
            page_size=clamp_page_size(page_size),
            sort_key=sort_key,
            direction=sort_direction,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    def where_clause(self) -> Optional[ColumnElement]:
        """
        Case-insensitive substring match on title OR content.

        The term is lowercased in Python but the columns by the database's
        lower(), which on SQLite folds ASCII only: "ÄPFEL" does not match
        q=äpfel there. PostgreSQL folds the full Unicode range.
        """
        if self.term is None:
            return None
        # autoescape: % and _ in the term match themselves
        return or_(
            func.lower(Note.title, type_=String).contains(self.term, autoescape=True),
            func.lower(Note.content, type_=String).contains(self.term, autoescape=True),
        )

    def order_by(self) -> Tuple[ColumnElement, ColumnElement]:
        """Primary key then Note.id, both in the requested direction."""
        primary = sort_expression(self.sort_key)
        if self.descending:
            return primary.desc(), Note.id.desc()
        return primary.asc(), Note.id.asc()

    def count_statement(self) -> Select:
        """COUNT of matching notes, ignoring the page window."""
        stmt = select(func.count(Note.id))
        where = self.where_clause()
        if where is not None:
            stmt = stmt.where(where)
        return stmt

    def page_statement(self) -> Select:
        """Matching notes, ordered, limited to this page."""
        stmt = select(Note)
        where = self.where_clause()
        if where is not None:
            stmt = stmt.where(where)
        return (
            stmt.order_by(*self.order_by())
            .offset(self.offset)
            .limit(self.page_size)
        )
