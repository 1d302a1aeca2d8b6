"""
Noteful Backend — Note SQLAlchemy Model
========================================

What:  ORM model representing the `notes` table.
Why:   Maps rows to Python objects for NoteStore; Alembic mirrors it in
       migration 001.
Who:   Used by NoteStore for CRUD operations.

Table Design Rationale:
    - Integer primary key: clients address notes as /notes/<id>
    - content: TEXT, no artificial length limit
    - folder_id: FK into folders.id, ON DELETE CASCADE (a deleted folder
      takes its notes with it)
    - modified: UTC with timezone; stamped by NoteStore on create and on
      every update (never by the client)

    Index on folder_id:
        Serves "notes in this folder" listings and the cascade on folder
        delete without a sequential scan.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base

if TYPE_CHECKING:
    from noteful.models.folder import Folder


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    Represents a note filed in a folder.

    Lifecycle:
        1. Created via POST /notes (modified = now)
        2. Updated via PATCH /notes/{id} (modified = now again)
        3. Deleted via DELETE /notes/{id}, or with its folder
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Title of the note",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Body of the note",
    )

    folder_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=False,
        comment="Folder this note is filed under",
    )

    modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="Last create/update time (UTC)",
    )

    folder: Mapped["Folder"] = relationship(back_populates="notes")

    __table_args__ = (
        Index("idx_notes_folder_id", "folder_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, folder_id={self.folder_id}, "
            f"modified='{self.modified}')>"
        )
