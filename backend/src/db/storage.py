"""
SQLite storage: engine lifecycle, schema creation, and transaction scope.

A `Storage` instance is created once at startup and handed to whoever needs
database access; nothing here is a module-level singleton.
"""
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import Executable, Row, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from models import Base
from services.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)

# Seconds a connection waits on a locked database before giving up
BUSY_TIMEOUT_SECONDS = 30


def _set_sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
    """Enable FK enforcement (needed for cascades) and WAL on every new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def _ensure_database_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    database = url.database
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


class Storage:
    """Owns the async engine and hands out transactional sessions."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        _ensure_database_directory(database_url)
        self.database_url = database_url
        self.engine = create_async_engine(
            database_url,
            echo=echo,
            connect_args={"timeout": BUSY_TIMEOUT_SECONDS},
        )
        event.listen(self.engine.sync_engine, "connect", _set_sqlite_pragmas)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_schema(self) -> None:
        """Create tables and indexes that don't exist yet. Safe to run on every startup."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except DBAPIError as exc:
            logger.error("Schema creation failed for %s", self.database_url)
            raise StorageUnavailableError(f"Database unavailable: {exc.orig}") from exc
        logger.info("Database schema ready at %s", self.database_url)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session wrapped in a single transaction.

        Commits when the block exits normally and rolls back on any exception,
        so multi-statement writes are applied all-or-nothing. Driver failures
        other than constraint violations surface as StorageUnavailableError.
        """
        try:
            async with self.session_factory() as session, session.begin():
                yield session
        except IntegrityError:
            raise
        except DBAPIError as exc:
            logger.error("Database error: %s", exc.orig)
            raise StorageUnavailableError(f"Database unavailable: {exc.orig}") from exc

    async def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


async def execute(db: AsyncSession, statement: Executable) -> int:
    """Run a write statement and return the number of rows affected."""
    result = await db.execute(statement)
    return result.rowcount


async def query_one(db: AsyncSession, statement: Executable) -> Row | None:
    """Run a statement and return its first row, or None."""
    result = await db.execute(statement)
    return result.first()


async def query_many(db: AsyncSession, statement: Executable) -> list[Row]:
    """Run a statement and return every row."""
    result = await db.execute(statement)
    return list(result.all())
