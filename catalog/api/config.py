"""
API configuration loaded from environment or defaults.
"""

import os
from pathlib import Path

from catalog.database.connection import get_database_url as sqlite_url


def get_database_url() -> str:
    """Get async SQLAlchemy database URL from env or the default SQLite file."""
    return os.getenv("DATABASE_URL", "") or sqlite_url(
        str(Path(__file__).resolve().parents[2] / "data" / "catalog.db")
    )


def get_sql_echo() -> bool:
    """Whether to log every SQL statement."""
    return os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "8000"))
