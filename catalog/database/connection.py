"""
Async database connection management using SQLAlchemy.

``DatabaseManager`` owns the engine and hands out connections through two
scopes: ``connection()`` for reads and ``transaction()`` for atomic writes.
Both translate driver errors into catalog errors after the connection has
been released and any open transaction rolled back.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from catalog.database.models import Base
from catalog.errors import ConflictError, TransientStorageError

logger = logging.getLogger(__name__)


# Default database path
DEFAULT_DB_PATH = "data/catalog.db"


def get_database_url(db_path: str = DEFAULT_DB_PATH) -> str:
    """
    Get SQLite database URL for the async driver.

    Args:
        db_path: Path to SQLite database file, or ':memory:'

    Returns:
        SQLAlchemy database URL
    """
    if db_path == ":memory:":
        return "sqlite+aiosqlite:///:memory:"

    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    return f"sqlite+aiosqlite:///{os.path.abspath(db_path)}"


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Enable foreign key constraints for SQLite.

    SQLite disables foreign key constraints by default.
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@asynccontextmanager
async def _translate_errors() -> AsyncIterator[None]:
    try:
        yield
    except IntegrityError as e:
        logger.warning("Integrity violation: %s", e.orig)
        raise ConflictError(str(e.orig)) from e
    except (OperationalError, InterfaceError) as e:
        logger.error("Storage failure: %s", e.orig)
        raise TransientStorageError(str(e.orig)) from e


class DatabaseManager:
    """
    Database connection manager.

    Handles engine creation, scoped connection acquisition, and schema
    creation.
    """

    def __init__(self, database_url: str, echo: bool = False):
        """
        Initialize database manager.

        Args:
            database_url: SQLAlchemy async URL (e.g. sqlite+aiosqlite:///...)
            echo: If True, log all SQL statements (useful for debugging)
        """
        self.database_url = database_url
        url = make_url(database_url)

        kwargs = {}
        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            # A single shared connection keeps an in-memory database alive
            kwargs["poolclass"] = StaticPool

        self.engine: AsyncEngine = create_async_engine(database_url, echo=echo, **kwargs)

        if url.get_backend_name() == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _set_sqlite_pragma)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """
        Acquire a connection for read-only work.

        Usage:
            async with db_manager.connection() as conn:
                result = await conn.execute(stmt)

        Yields:
            AsyncConnection, released on every exit path
        """
        async with _translate_errors():
            async with self.engine.connect() as conn:
                yield conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        """
        Acquire a connection with an open transaction.

        Commits when the block exits normally. Any exception, including
        cancellation, rolls the transaction back before it propagates.

        Yields:
            AsyncConnection bound to the transaction
        """
        async with _translate_errors():
            async with self.engine.begin() as conn:
                yield conn

    async def create_tables(self) -> None:
        """Create all tables defined in the models if they don't exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """
        Drop all tables defined in the models.

        WARNING: This will delete all data in the database!
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def reset_database(self) -> None:
        """Drop and recreate all tables."""
        await self.drop_tables()
        await self.create_tables()

    async def close(self) -> None:
        """Dispose of the engine and all pooled connections."""
        await self.engine.dispose()
