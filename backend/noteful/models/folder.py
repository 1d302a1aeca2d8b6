"""
Noteful Backend — Folder SQLAlchemy Model
==========================================

What:  ORM model for the `folders` table.
Who:   Used by FolderStore for CRUD and by Alembic for schema management.

Table Design Rationale:
    - Integer primary key generated by the database on insert
    - name: required, non-empty (enforced by the validation layer)
    - Notes reference folders with ON DELETE CASCADE; deleting a folder
      removes the notes filed under it
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base

if TYPE_CHECKING:
    from noteful.models.note import Note


class Folder(Base):
    """A named container for notes."""

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Display name of the folder",
    )

    # passive_deletes: the database cascade removes the notes; the ORM does
    # not load the collection just to delete it
    notes: Mapped[List["Note"]] = relationship(
        back_populates="folder",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
