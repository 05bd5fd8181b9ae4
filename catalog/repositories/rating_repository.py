"""
Rating repository.

Owns the ratings table. A user has at most one rating per movie; rating the
same movie again overwrites the stored value.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import mysql, postgresql, sqlite

from catalog.database.connection import DatabaseManager
from catalog.database.models import MovieRecord, RatingRecord
from catalog.domain import MovieRating

logger = logging.getLogger(__name__)

movies = MovieRecord.__table__
ratings = RatingRecord.__table__


def upsert_statement(dialect_name: str, values: dict):
    """
    Build an insert-or-overwrite statement keyed on (userid, movieid).

    Args:
        dialect_name: Name of the connected dialect
        values: Column values for the rating row

    Raises:
        NotImplementedError: If the dialect has no native upsert support here
    """
    if dialect_name in ("sqlite", "postgresql"):
        dialect_insert = sqlite.insert if dialect_name == "sqlite" else postgresql.insert
        stmt = dialect_insert(ratings).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[ratings.c.userid, ratings.c.movieid],
            set_={"rating": stmt.excluded.rating},
        )
    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql.insert(ratings).values(**values)
        return stmt.on_duplicate_key_update(rating=stmt.inserted.rating)
    raise NotImplementedError(f"Rating upsert is not supported for {dialect_name}")


def upsert_stored(dialect_name: str, rowcount: int) -> bool:
    """
    Whether an upsert left the requested rating in place.

    MySQL reports 0 affected rows when the stored value already equals the
    new one; every other supported dialect reports 1.
    """
    if dialect_name in ("mysql", "mariadb"):
        return rowcount >= 0
    return rowcount > 0


class RatingRepository:
    """Persistence for per-user movie ratings."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def rate_movie(self, movie_id: uuid.UUID, rating: int, user_id: uuid.UUID) -> bool:
        """
        Store a user's rating, replacing any earlier one for the same movie.

        Returns:
            True if the rating is stored with the requested value
        """
        async with self.db_manager.transaction() as conn:
            stmt = upsert_statement(
                conn.dialect.name,
                {"userid": user_id, "movieid": movie_id, "rating": rating},
            )
            result = await conn.execute(stmt)

        logger.debug("User %s rated movie %s: %d", user_id, movie_id, rating)
        return upsert_stored(conn.dialect.name, result.rowcount)

    async def delete_rating(self, movie_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """
        Remove a user's rating for a movie.

        Returns:
            True if a rating was deleted, False if none existed
        """
        async with self.db_manager.transaction() as conn:
            result = await conn.execute(
                delete(ratings).where(
                    ratings.c.movieid == movie_id,
                    ratings.c.userid == user_id,
                )
            )
        return result.rowcount > 0

    async def get_rating(self, movie_id: uuid.UUID) -> Optional[float]:
        """Mean of all ratings for a movie, or None if it has none."""
        async with self.db_manager.connection() as conn:
            value = await conn.scalar(
                select(func.avg(ratings.c.rating)).where(ratings.c.movieid == movie_id)
            )
        return float(value) if value is not None else None

    async def get_rating_for_user(
        self,
        movie_id: uuid.UUID,
        user_id: uuid.UUID,
    ) -> Tuple[Optional[float], Optional[int]]:
        """
        Mean rating of a movie together with one user's own rating.

        Returns:
            (mean or None, the user's rating or None)
        """
        average = (
            select(func.avg(ratings.c.rating))
            .where(ratings.c.movieid == movie_id)
            .scalar_subquery()
        )
        own = (
            select(ratings.c.rating)
            .where(ratings.c.movieid == movie_id, ratings.c.userid == user_id)
            .scalar_subquery()
        )
        async with self.db_manager.connection() as conn:
            row = (await conn.execute(select(average.label("rating"), own.label("userrating")))).one()

        rating = float(row.rating) if row.rating is not None else None
        return rating, row.userrating

    async def get_ratings_for_user(self, user_id: uuid.UUID) -> List[MovieRating]:
        """Every rating a user has submitted, with the rated movie's slug."""
        stmt = (
            select(ratings.c.movieid, movies.c.slug, ratings.c.rating)
            .select_from(ratings)
            .join(movies, movies.c.id == ratings.c.movieid)
            .where(ratings.c.userid == user_id)
        )
        async with self.db_manager.connection() as conn:
            rows = (await conn.execute(stmt)).all()

        return [
            MovieRating(movie_id=row.movieid, slug=row.slug, rating=row.rating)
            for row in rows
        ]
