"""
Database initialization and schema verification.
"""

import logging

from sqlalchemy import inspect

from catalog.database.connection import DatabaseManager

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'movies', 'genres', 'ratings'}


async def init_database(db_manager: DatabaseManager, reset: bool = False) -> DatabaseManager:
    """
    Create all tables.

    Args:
        db_manager: DatabaseManager to initialize
        reset: If True, drop existing tables before creating new ones

    Returns:
        The same DatabaseManager
    """
    if reset:
        logger.info("Resetting database (dropping all tables)")
        await db_manager.reset_database()
    else:
        await db_manager.create_tables()
    logger.info("Database tables ready")
    return db_manager


async def verify_schema(db_manager: DatabaseManager) -> bool:
    """
    Verify that all tables exist in the database.

    Returns:
        True if all tables exist, False otherwise
    """
    async with db_manager.connection() as conn:
        existing_tables = set(
            await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        )

    missing_tables = EXPECTED_TABLES - existing_tables
    if missing_tables:
        logger.warning("Missing tables: %s", missing_tables)
        return False
    return True
