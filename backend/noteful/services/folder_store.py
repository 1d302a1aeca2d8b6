"""
Noteful Backend — Folder Store Adapter
=======================================

What:  CRUD operations against the `folders` table.
Who:   Called by the folders router; NoteStore relies on the same table for
       its folder reference check.

Delete policy:
    Deleting a folder deletes every note filed under it, in the same
    transaction. The explicit note delete keeps the behavior identical on
    databases that do not enforce the ON DELETE CASCADE foreign key
    (SQLite without `PRAGMA foreign_keys`).
"""

import logging
from typing import Any, List, Mapping

from sqlalchemy import delete, select

from noteful.exceptions import NotFoundError
from noteful.models.folder import Folder
from noteful.models.note import Note
from noteful.services.store import BaseStore

logger = logging.getLogger(__name__)


class FolderStore(BaseStore):
    """
    Folder persistence.

    Every method opens its own transaction; returned Folder objects are
    detached but fully loaded (expire_on_commit=False).
    """

    entity = "Folder"

    UPDATABLE_FIELDS = ("name",)

    async def list(self) -> List[Folder]:
        """All folders in ascending id order."""
        async with self._transaction("list") as session:
            result = await session.execute(select(Folder).order_by(Folder.id))
            return list(result.scalars().all())

    async def get(self, folder_id: int) -> Folder:
        """
        Raises:
            NotFoundError: no folder with this id (→ 404 "Folder doesn't exist")
        """
        self._require_valid_id(folder_id)
        async with self._transaction("get", folder_id=folder_id) as session:
            folder = await session.get(Folder, folder_id)
            if folder is None:
                raise NotFoundError(resource=self.entity, resource_id=folder_id)
            return folder

    async def create(self, name: str) -> Folder:
        async with self._transaction("create") as session:
            folder = Folder(name=name)
            session.add(folder)
            await session.flush()  # assigns the generated id
            logger.info("Folder created: %s", folder.id)
            return folder

    async def update(self, folder_id: int, fields: Mapping[str, Any]) -> Folder:
        """
        Applies a partial update. Keys outside UPDATABLE_FIELDS are ignored.

        Raises:
            NotFoundError: no folder with this id
        """
        self._require_valid_id(folder_id)
        async with self._transaction("update", folder_id=folder_id) as session:
            folder = await session.get(Folder, folder_id)
            if folder is None:
                raise NotFoundError(resource=self.entity, resource_id=folder_id)
            for key, value in fields.items():
                if key in self.UPDATABLE_FIELDS:
                    setattr(folder, key, value)
            await session.flush()
            logger.info("Folder updated: %s (%s)", folder_id, ", ".join(sorted(fields)))
            return folder

    async def delete(self, folder_id: int) -> None:
        """
        Removes the folder and cascades to its notes.

        Raises:
            NotFoundError: no folder with this id
        """
        self._require_valid_id(folder_id)
        async with self._transaction("delete", folder_id=folder_id) as session:
            folder = await session.get(Folder, folder_id)
            if folder is None:
                raise NotFoundError(resource=self.entity, resource_id=folder_id)
            result = await session.execute(
                delete(Note).where(Note.folder_id == folder_id)
            )
            await session.execute(delete(Folder).where(Folder.id == folder_id))
            logger.info(
                "Folder deleted: %s (cascaded to %d notes)",
                folder_id, result.rowcount or 0,
            )
