"""
Movie repository.

Owns the movies and genres tables. Every write that touches both tables runs
in a single transaction so a movie is never visible without its genres.
"""

import logging
import uuid
from typing import Iterable, List, Optional, Set

from sqlalchemy import delete, exists, func, insert, null, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from catalog.database.connection import DatabaseManager
from catalog.database.models import GenreRecord, MovieRecord, RatingRecord
from catalog.domain import GetAllMoviesOptions, Movie, SortField, SortOrder

logger = logging.getLogger(__name__)

movies = MovieRecord.__table__
genres = GenreRecord.__table__
ratings = RatingRecord.__table__

GENRE_SEPARATOR = ","

# Only these columns can ever appear in an ORDER BY clause.
SORT_COLUMNS = {
    SortField.TITLE: movies.c.title,
    SortField.YEAR_OF_RELEASE: movies.c.yearofrelease,
}


def parse_genres(value: Optional[str]) -> Set[str]:
    """Split a concatenated genre list; NULL or '' yields an empty set."""
    if not value:
        return set()
    return {name for name in value.split(GENRE_SEPARATOR) if name}


def _as_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _filter_clauses(title: Optional[str], year_of_release: Optional[int]) -> list:
    clauses = []
    if title:
        clauses.append(movies.c.title.icontains(title, autoescape=True))
    if year_of_release is not None:
        clauses.append(movies.c.yearofrelease == year_of_release)
    return clauses


def _order_by_clause(options: GetAllMoviesOptions):
    if options.sort_field is None:
        return None
    # Raises ValueError for anything outside the allow-list.
    column = SORT_COLUMNS[SortField(options.sort_field.lower())]
    if options.sort_order == SortOrder.DESCENDING:
        return column.desc()
    return column.asc()


class MovieRepository:
    """Persistence for movies and their genres."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def create(self, movie: Movie) -> bool:
        """
        Insert a movie and its genres atomically.

        Returns:
            True if the movie row was inserted

        Raises:
            ConflictError: If the slug or id is already taken
        """
        async with self.db_manager.transaction() as conn:
            result = await conn.execute(
                insert(movies).values(
                    id=movie.id,
                    slug=movie.slug,
                    title=movie.title,
                    yearofrelease=movie.year_of_release,
                )
            )
            if result.rowcount == 1:
                await self._insert_genres(conn, movie.id, movie.genres)

        logger.debug("Created movie %s (%s)", movie.id, movie.slug)
        return result.rowcount == 1

    async def get_by_id(
        self,
        movie_id: uuid.UUID,
        user_id: Optional[uuid.UUID] = None,
    ) -> Optional[Movie]:
        """
        Get a movie by id with its aggregate rating.

        Args:
            movie_id: Movie id
            user_id: If given, that user's own rating is included

        Returns:
            Movie or None if not found
        """
        return await self._get_one(movies.c.id == movie_id, user_id)

    async def get_by_slug(
        self,
        slug: str,
        user_id: Optional[uuid.UUID] = None,
    ) -> Optional[Movie]:
        """Get a movie by slug. Same contract as ``get_by_id``."""
        return await self._get_one(movies.c.slug == slug, user_id)

    async def get_all(self, options: GetAllMoviesOptions) -> List[Movie]:
        """
        List one page of movies matching the options.

        Options must already have passed the options validator. Without a
        sort field no ORDER BY is emitted and the order is up to the store.
        """
        genre_list = (
            select(
                genres.c.movieid,
                func.aggregate_strings(genres.c.name, GENRE_SEPARATOR).label("genres"),
            )
            .group_by(genres.c.movieid)
            .subquery("g")
        )
        average = (
            select(ratings.c.movieid, func.avg(ratings.c.rating).label("rating"))
            .group_by(ratings.c.movieid)
            .subquery("r")
        )

        source = (
            movies
            .outerjoin(genre_list, genre_list.c.movieid == movies.c.id)
            .outerjoin(average, average.c.movieid == movies.c.id)
        )
        if options.user_id is not None:
            own = ratings.alias("myr")
            source = source.outerjoin(
                own, (own.c.movieid == movies.c.id) & (own.c.userid == options.user_id)
            )
            user_rating = own.c.rating
        else:
            user_rating = null()

        stmt = (
            select(
                movies.c.id,
                movies.c.title,
                movies.c.yearofrelease,
                genre_list.c.genres,
                average.c.rating,
                user_rating.label("userrating"),
            )
            .select_from(source)
            .where(*_filter_clauses(options.title, options.year_of_release))
        )

        order_by = _order_by_clause(options)
        if order_by is not None:
            stmt = stmt.order_by(order_by)

        stmt = stmt.offset((options.page - 1) * options.page_size).limit(options.page_size)

        async with self.db_manager.connection() as conn:
            rows = (await conn.execute(stmt)).all()

        return [
            Movie(
                id=row.id,
                title=row.title,
                year_of_release=row.yearofrelease,
                genres=parse_genres(row.genres),
                rating=_as_float(row.rating),
                user_rating=row.userrating,
            )
            for row in rows
        ]

    async def count(
        self,
        title: Optional[str] = None,
        year_of_release: Optional[int] = None,
    ) -> int:
        """Count movies matching the same filters ``get_all`` applies."""
        stmt = (
            select(func.count())
            .select_from(movies)
            .where(*_filter_clauses(title, year_of_release))
        )
        async with self.db_manager.connection() as conn:
            return (await conn.execute(stmt)).scalar_one()

    async def update(self, movie: Movie) -> bool:
        """
        Replace a movie's genres and overwrite its scalar fields atomically.

        The genre set is deleted and reinserted in full rather than diffed.

        Returns:
            True if the movie row was updated
        """
        async with self.db_manager.transaction() as conn:
            await conn.execute(delete(genres).where(genres.c.movieid == movie.id))
            await self._insert_genres(conn, movie.id, movie.genres)
            result = await conn.execute(
                update(movies)
                .where(movies.c.id == movie.id)
                .values(
                    slug=movie.slug,
                    title=movie.title,
                    yearofrelease=movie.year_of_release,
                )
            )

        logger.debug("Updated movie %s (rows=%d)", movie.id, result.rowcount)
        return result.rowcount > 0

    async def delete(self, movie_id: uuid.UUID) -> bool:
        """
        Delete a movie and its genres atomically.

        Returns:
            True if the movie row was deleted, False if it did not exist
        """
        async with self.db_manager.transaction() as conn:
            await conn.execute(delete(genres).where(genres.c.movieid == movie_id))
            result = await conn.execute(delete(movies).where(movies.c.id == movie_id))

        logger.debug("Deleted movie %s (rows=%d)", movie_id, result.rowcount)
        return result.rowcount > 0

    async def exists_by_id(self, movie_id: uuid.UUID) -> bool:
        async with self.db_manager.connection() as conn:
            found = await conn.scalar(select(exists().where(movies.c.id == movie_id)))
        return bool(found)

    async def _get_one(self, criterion, user_id: Optional[uuid.UUID]) -> Optional[Movie]:
        average = (
            select(func.avg(ratings.c.rating))
            .where(ratings.c.movieid == movies.c.id)
            .scalar_subquery()
        )
        if user_id is not None:
            user_rating = (
                select(ratings.c.rating)
                .where(ratings.c.movieid == movies.c.id, ratings.c.userid == user_id)
                .scalar_subquery()
            )
        else:
            user_rating = null()

        stmt = select(
            movies.c.id,
            movies.c.title,
            movies.c.yearofrelease,
            average.label("rating"),
            user_rating.label("userrating"),
        ).where(criterion)

        async with self.db_manager.connection() as conn:
            row = (await conn.execute(stmt)).one_or_none()
            if row is None:
                return None
            names = (
                await conn.execute(select(genres.c.name).where(genres.c.movieid == row.id))
            ).scalars().all()

        return Movie(
            id=row.id,
            title=row.title,
            year_of_release=row.yearofrelease,
            genres=set(names),
            rating=_as_float(row.rating),
            user_rating=row.userrating,
        )

    @staticmethod
    async def _insert_genres(
        conn: AsyncConnection,
        movie_id: uuid.UUID,
        names: Iterable[str],
    ) -> None:
        for name in sorted(names):
            await conn.execute(insert(genres).values(movieid=movie_id, name=name))
