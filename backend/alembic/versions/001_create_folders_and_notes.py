"""Create folders and notes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `folders` and `notes`, with notes.folder_id referencing
       folders.id (ON DELETE CASCADE).
How:   Portable column types only, so the same migration runs on
       PostgreSQL and SQLite.

Rollback: downgrade() drops both tables (destructive — all data lost).
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
    """Create folders first; notes references it."""
    op.create_table(
        "folders",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name",
            sa.Text(),
            nullable=False,
            comment="Display name of the folder",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name",
            sa.Text(),
            nullable=False,
            comment="Title of the note",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Body of the note",
        ),
        sa.Column(
            "folder_id",
            sa.Integer(),
            nullable=False,
            comment="Folder this note is filed under",
        ),
        sa.Column(
            "modified",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="Last create/update time (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["folder_id"],
            ["folders.id"],
            ondelete="CASCADE",
        ),
    )

    # Serves per-folder listings and the cascade on folder delete
    op.create_index("idx_notes_folder_id", "notes", ["folder_id"])


def downgrade() -> None:
    """Drop both tables, notes first (it holds the foreign key)."""
    op.drop_index("idx_notes_folder_id", table_name="notes")
    op.drop_table("notes")
    op.drop_table("folders")
