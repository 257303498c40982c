"""
Notes API — Note SQLAlchemy Model
==================================

What:  ORM model representing the `notes` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteService / the query engine, and by Alembic for schema management.

Table Design:
    - Integer primary key assigned by the store. On SQLite the table uses
      AUTOINCREMENT so ids of deleted rows are never handed out again;
      PostgreSQL sequences already behave that way.
    - title: VARCHAR(200), trimmed and non-blank (enforced by the service).
    - content: TEXT, at most 4000 characters after trimming, "" when absent.
    - created_at: set once on insert.
    - updated_at: NULL until the first update.

Lifecycle:
    1. Created by NoteService.create_note (updated_at = NULL)
    2. Title/content replaced wholesale by update_note (updated_at = now)
    3. Hard-deleted by delete_note (no tombstone)
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 4000

# Signed 64-bit, the widest INTEGER SQLite and BIGINT columns hold
ID_MIN = -(2 ** 63)
ID_MAX = 2 ** 63 - 1


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamp on every backend.

    SQLite stores timestamps without an offset and hands back naive values;
    they are read back as UTC so comparisons and serialization behave the
    same as on PostgreSQL.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A single text note.

    Query Patterns:
        - Get single note: SELECT ... WHERE id = :id (primary key)
        - List: optional lower(title/content) LIKE filter, ORDER BY one of
          id / title / created_at / coalesce(updated_at, created_at),
          then id, with LIMIT/OFFSET
    """

    __tablename__ = "notes"

    # ── Primary Key ───────────────────────────────────────────────────────
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-assigned identifier; also the ordering tie-break",
    )

    # ── Text ──────────────────────────────────────────────────────────────
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        comment="Short title, 1-200 characters after trimming",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Free-form text, at most 4000 characters after trimming",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
        comment="When this note was last updated (UTC); NULL if never updated",
    )

    # ── Indexes ───────────────────────────────────────────────────────────
    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
        Index("idx_notes_updated_at", "updated_at"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, title={self.title!r}, "
            f"created_at='{self.created_at}', updated_at='{self.updated_at}')>"
        )
