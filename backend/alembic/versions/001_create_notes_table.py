"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `notes` table: integer id, title, content, created_at,
       updated_at.
How:   Portable column types; AUTOINCREMENT on SQLite so deleted ids are
       never reused.

Rollback: downgrade() drops the table entirely (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the notes table with its indexes. See notes_api/models/note.py."""
    op.create_table(
        "notes",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Store-assigned identifier; also the ordering tie-break",
        ),
        sa.Column(
            "title",
            sa.String(200),
            nullable=False,
            comment="Short title, 1-200 characters after trimming",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Free-form text, at most 4000 characters after trimming",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="When this note was last updated (UTC); NULL if never updated",
        ),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    op.create_index("idx_notes_created_at", "notes", ["created_at"])
    op.create_index("idx_notes_updated_at", "notes", ["updated_at"])


def downgrade() -> None:
    """Drop the notes table entirely. All note data is lost."""
    op.drop_index("idx_notes_updated_at", table_name="notes")
    op.drop_index("idx_notes_created_at", table_name="notes")
    op.drop_table("notes")
