"""
Database module for the movie catalog.

This module provides the table models, async connection management and
schema initialization.
"""

from catalog.database.models import Base, MovieRecord, GenreRecord, RatingRecord
from catalog.database.connection import DatabaseManager, get_database_url
from catalog.database.init_db import init_database, verify_schema

__all__ = [
    # Models
    'Base',
    'MovieRecord',
    'GenreRecord',
    'RatingRecord',
    # Connection
    'DatabaseManager',
    'get_database_url',
    # Initialization
    'init_database',
    'verify_schema',
]
