"""
Noteful Backend — Store Adapter Base
=====================================

What:  Shared plumbing for FolderStore and NoteStore.
Why:   Every store operation runs in its own transaction and reports
       unexpected database failures the same way: logged with context,
       surfaced to the client as a generic StoreError (→ 500).
How:   `_transaction()` wraps Database.session() and translates
       SQLAlchemyError into StoreError. Application errors raised inside the
       block (NotFoundError) pass through untouched after the rollback.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import Database
from noteful.exceptions import NotFoundError, StoreError

logger = logging.getLogger(__name__)

# Integer primary keys are 32-bit signed on PostgreSQL; ids are generated from 1
MIN_ID = 1
MAX_ID = 2**31 - 1


class BaseStore:
    """Holds the Database dependency and the transaction helper."""

    entity = "Entity"

    def __init__(self, database: Database):
        self.database = database

    def _require_valid_id(self, entity_id: int, resource: Optional[str] = None) -> None:
        """
        Reports ids that no row can have as missing, without a query.

        Raises:
            NotFoundError: `entity_id` is outside the integer column's range
        """
        if not MIN_ID <= entity_id <= MAX_ID:
            raise NotFoundError(resource=resource or self.entity, resource_id=entity_id)

    @asynccontextmanager
    async def _transaction(self, operation: str, **context: Any) -> AsyncIterator[AsyncSession]:
        try:
            async with self.database.session() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(
                "Database error during %s.%s %s: %s",
                self.entity, operation, context, str(e),
                exc_info=True,
            )
            raise StoreError(
                context={
                    "entity": self.entity,
                    "operation": operation,
                    "error_type": type(e).__name__,
                    **context,
                },
            ) from e
