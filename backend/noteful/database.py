"""
Noteful Backend — Database Engine & Session Management
=======================================================

What:  The `Database` object owning the async SQLAlchemy engine and session
       factory, plus the declarative `Base` for ORM models.
Why:   Store adapters receive a `Database` in their constructor instead of
       looking up a global engine. The app factory builds one per app, tests
       build one per test against in-memory SQLite.
How:   Wraps `create_async_engine` + `async_sessionmaker`. `session()` yields
       a session that commits on success and rolls back on error.
Who:   Created by `noteful.main.create_app()`; used by FolderStore/NoteStore.

Connection Pooling Strategy (PostgreSQL):
    pool_size / max_overflow:  Sized from settings (default 10 + 5)
    pool_pre_ping:             Validates connections before use
    pool_recycle=3600:         Recycles connections every hour

    SQLite (tests, local dev) uses the driver defaults instead; the
    in-memory variant uses StaticPool so every session sees the same
    database.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations and
    `Database.create_all()` uses to bootstrap test databases.
    """
    pass


def _engine_options(
    url: str,
    pool_size: int,
    max_overflow: int,
    pool_pre_ping: bool,
) -> dict:
    """Picks engine keyword arguments suitable for the target backend."""
    if url.startswith("sqlite"):
        if url.rstrip("/").endswith(("sqlite+aiosqlite:", "sqlite:")) or ":memory:" in url:
            return {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": pool_pre_ping,
        "pool_recycle": 3600,
    }


class Database:
    """
    Owns the engine and session factory for one database.

    Lifecycle:
        1. Constructed once by the app factory (or a test fixture)
        2. Handed to each store adapter
        3. `dispose()` during application shutdown
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            **_engine_options(url, pool_size, max_overflow, pool_pre_ping),
        )
        # expire_on_commit=False: ORM objects stay readable after the
        # session closes, which is when routes serialize them
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        """Builds a Database from a `noteful.config.Settings` instance."""
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provides a transactional session scope.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller (the caller performs queries)
            3. On success: commits the transaction
            4. On error: rolls back and re-raises
            5. Always: closes the session (returns connection to pool)

        Example:
            async with database.session() as session:
                session.add(Folder(name="Inbox"))
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Creates every mapped table. Used by tests and local bootstrap."""
        # Model modules register their tables with Base.metadata on import
        from noteful.models import folder, note  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Runs `SELECT 1`; returns False instead of raising when unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Gracefully closes all pooled connections (application shutdown)."""
        await self.engine.dispose()
