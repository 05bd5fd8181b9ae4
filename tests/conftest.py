"""
Shared fixtures: an in-memory SQLite database per test, with repositories and
services wired to it.
"""

import uuid

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from catalog.database import DatabaseManager, GenreRecord, RatingRecord
from catalog.domain import Movie
from catalog.repositories import MovieRepository, RatingRepository
from catalog.services import MovieService, RatingService

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_manager():
    """Fresh in-memory database with all tables created."""
    manager = DatabaseManager(IN_MEMORY_URL)
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def movie_repository(db_manager):
    return MovieRepository(db_manager)


@pytest.fixture
def rating_repository(db_manager):
    return RatingRepository(db_manager)


@pytest.fixture
def movie_service(movie_repository, rating_repository):
    return MovieService(movie_repository, rating_repository)


@pytest.fixture
def rating_service(movie_repository, rating_repository):
    return RatingService(movie_repository, rating_repository)


@pytest.fixture
def make_movie():
    """Factory for valid movies; a new id is generated unless one is given."""
    def _make(title="The Matrix", year=1999, genres=("Action", "Sci-Fi"), movie_id=None):
        return Movie(
            id=movie_id or uuid.uuid4(),
            title=title,
            year_of_release=year,
            genres=set(genres),
        )
    return _make


@pytest.fixture
def genre_rows(db_manager):
    """Count stored genre rows for a movie id."""
    async def _count(movie_id) -> int:
        async with db_manager.connection() as conn:
            return await conn.scalar(
                select(func.count()).select_from(GenreRecord).where(GenreRecord.movieid == movie_id)
            )
    return _count


@pytest.fixture
def rating_rows(db_manager):
    """Count stored rating rows for a movie id."""
    async def _count(movie_id) -> int:
        async with db_manager.connection() as conn:
            return await conn.scalar(
                select(func.count()).select_from(RatingRecord).where(RatingRecord.movieid == movie_id)
            )
    return _count
