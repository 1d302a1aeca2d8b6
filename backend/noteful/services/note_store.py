"""
Noteful Backend — Note Store Adapter
=====================================

What:  CRUD operations against the `notes` table.
Who:   Called by the notes router and by GET /folders/{id}/notes.

Rules enforced here (not by the database):
    - A note can only be created in an existing folder. The folder is
      looked up in the same transaction; a missing folder is reported as
      NotFoundError("Folder") rather than surfacing as an FK violation.
    - `modified` is stamped with the current UTC time on create and on
      every update. Clients cannot set it.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import select

from noteful.exceptions import NotFoundError
from noteful.models.folder import Folder
from noteful.models.note import Note, utcnow
from noteful.services.store import BaseStore

logger = logging.getLogger(__name__)


class NoteStore(BaseStore):
    """Note persistence; mirrors FolderStore plus folder checks and stamping."""

    entity = "Note"

    UPDATABLE_FIELDS = ("name", "content")

    async def list(self, folder_id: Optional[int] = None) -> List[Note]:
        """
        Notes in ascending id order, optionally limited to one folder.

        Raises:
            NotFoundError: `folder_id` given but no such folder exists
        """
        if folder_id is not None:
            self._require_valid_id(folder_id, resource="Folder")
        async with self._transaction("list", folder_id=folder_id) as session:
            query = select(Note).order_by(Note.id)
            if folder_id is not None:
                if await session.get(Folder, folder_id) is None:
                    raise NotFoundError(resource="Folder", resource_id=folder_id)
                query = query.where(Note.folder_id == folder_id)
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get(self, note_id: int) -> Note:
        """
        Raises:
            NotFoundError: no note with this id (→ 404 "Note doesn't exist")
        """
        self._require_valid_id(note_id)
        async with self._transaction("get", note_id=note_id) as session:
            note = await session.get(Note, note_id)
            if note is None:
                raise NotFoundError(resource=self.entity, resource_id=note_id)
            return note

    async def create(self, name: str, content: str, folder_id: int) -> Note:
        """
        Inserts a note into an existing folder, stamping `modified`.

        Raises:
            NotFoundError: the referenced folder does not exist
        """
        self._require_valid_id(folder_id, resource="Folder")
        async with self._transaction("create", folder_id=folder_id) as session:
            if await session.get(Folder, folder_id) is None:
                raise NotFoundError(resource="Folder", resource_id=folder_id)
            note = Note(
                name=name,
                content=content,
                folder_id=folder_id,
                modified=utcnow(),
            )
            session.add(note)
            await session.flush()
            logger.info("Note created: %s in folder %s", note.id, folder_id)
            return note

    async def update(self, note_id: int, fields: Mapping[str, Any]) -> Note:
        """
        Applies a partial update and re-stamps `modified`.

        Raises:
            NotFoundError: no note with this id
        """
        self._require_valid_id(note_id)
        async with self._transaction("update", note_id=note_id) as session:
            note = await session.get(Note, note_id)
            if note is None:
                raise NotFoundError(resource=self.entity, resource_id=note_id)
            for key, value in fields.items():
                if key in self.UPDATABLE_FIELDS:
                    setattr(note, key, value)
            note.modified = utcnow()
            await session.flush()
            logger.info("Note updated: %s (%s)", note_id, ", ".join(sorted(fields)))
            return note

    async def delete(self, note_id: int) -> None:
        """
        Raises:
            NotFoundError: no note with this id
        """
        self._require_valid_id(note_id)
        async with self._transaction("delete", note_id=note_id) as session:
            note = await session.get(Note, note_id)
            if note is None:
                raise NotFoundError(resource=self.entity, resource_id=note_id)
            await session.delete(note)
            logger.info("Note deleted: %s", note_id)
