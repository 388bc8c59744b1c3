"""SQLite-backed document storage: engine lifecycle and unit-of-work sessions."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ..config import get_settings
from ..errors import StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base declarative model."""


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:  # noqa: ANN001
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """Owns the async engine for one SQLite file and hands out sessions.

    Each ``session()`` block is one unit of work: it commits on success and
    rolls back on any exception. Driver-level failures are re-raised as
    :class:`StorageError` so callers only deal with the service taxonomy.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def database_url(self) -> str:
        return f"sqlite+aiosqlite:///{self._db_path}"

    async def initialize(self) -> None:
        if self._engine is None:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._engine = create_async_engine(self.database_url, future=True)
            event.listen(self._engine.sync_engine, "connect", _enable_foreign_keys)
            self._session_maker = async_sessionmaker(self._engine, expire_on_commit=False)

        assert self._engine is not None
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            logger.exception("Could not create tables in %s", self._db_path)
            raise StorageError("Failed to initialize database", str(exc)) from exc

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._session_maker is None:
            raise RuntimeError("DatabaseManager not initialized")
        session = self._session_maker()
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.exception("Database operation failed")
            raise StorageError("Database operation failed", str(exc)) from exc
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


_db_manager: DatabaseManager | None = None


async def get_db_manager() -> DatabaseManager:
    global _db_manager
    if _db_manager is None:
        settings = get_settings()
        _db_manager = DatabaseManager(settings.database_path)
        await _db_manager.initialize()
    return _db_manager


async def shutdown_database() -> None:
    global _db_manager
    if _db_manager is not None:
        await _db_manager.dispose()
        _db_manager = None
