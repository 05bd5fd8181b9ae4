"""
Tests for the rating repository.
"""

import uuid

import pytest

from catalog.errors import ConflictError
from catalog.repositories.rating_repository import upsert_statement, upsert_stored

pytestmark = pytest.mark.asyncio


@pytest.fixture
def user_id():
    return uuid.uuid4()


class TestRateMovie:
    """Tests for the (movie, user) upsert."""

    async def test_rating_twice_keeps_latest(
        self, movie_repository, rating_repository, make_movie, rating_rows, user_id
    ):
        """A second rating by the same user overwrites the first."""
        movie = make_movie()
        await movie_repository.create(movie)

        assert await rating_repository.rate_movie(movie.id, 3, user_id) is True
        assert await rating_repository.rate_movie(movie.id, 5, user_id) is True

        assert await rating_rows(movie.id) == 1
        assert await rating_repository.get_rating(movie.id) == 5.0
        assert await rating_repository.get_rating_for_user(movie.id, user_id) == (5.0, 5)

    async def test_average_across_users(self, movie_repository, rating_repository, make_movie):
        movie = make_movie()
        await movie_repository.create(movie)
        for value in (2, 3, 4):
            await rating_repository.rate_movie(movie.id, value, uuid.uuid4())

        assert await rating_repository.get_rating(movie.id) == 3.0

    async def test_rating_unknown_movie_is_conflict(self, rating_repository, user_id):
        """The foreign key rejects ratings for movies that do not exist."""
        with pytest.raises(ConflictError):
            await rating_repository.rate_movie(uuid.uuid4(), 4, user_id)

    async def test_rating_same_value_again_reports_stored(
        self, movie_repository, rating_repository, make_movie, user_id
    ):
        movie = make_movie()
        await movie_repository.create(movie)

        assert await rating_repository.rate_movie(movie.id, 4, user_id) is True
        assert await rating_repository.rate_movie(movie.id, 4, user_id) is True
        assert await rating_repository.get_rating_for_user(movie.id, user_id) == (4.0, 4)


class TestReadAndDelete:
    async def test_no_ratings(self, movie_repository, rating_repository, make_movie, user_id):
        movie = make_movie()
        await movie_repository.create(movie)

        assert await rating_repository.get_rating(movie.id) is None
        assert await rating_repository.get_rating_for_user(movie.id, user_id) == (None, None)

    async def test_user_without_rating_sees_average_only(
        self, movie_repository, rating_repository, make_movie, user_id
    ):
        movie = make_movie()
        await movie_repository.create(movie)
        await rating_repository.rate_movie(movie.id, 4, uuid.uuid4())

        assert await rating_repository.get_rating_for_user(movie.id, user_id) == (4.0, None)

    async def test_delete_rating(
        self, movie_repository, rating_repository, make_movie, rating_rows, user_id
    ):
        movie = make_movie()
        await movie_repository.create(movie)
        await rating_repository.rate_movie(movie.id, 4, user_id)

        assert await rating_repository.delete_rating(movie.id, user_id) is True
        assert await rating_rows(movie.id) == 0
        assert await rating_repository.delete_rating(movie.id, user_id) is False

    async def test_get_ratings_for_user(
        self, movie_repository, rating_repository, make_movie, user_id
    ):
        matrix = make_movie(title="The Matrix", year=1999)
        heat = make_movie(title="Heat", year=1995)
        await movie_repository.create(matrix)
        await movie_repository.create(heat)
        await rating_repository.rate_movie(matrix.id, 5, user_id)
        await rating_repository.rate_movie(heat.id, 3, user_id)
        await rating_repository.rate_movie(heat.id, 1, uuid.uuid4())

        ratings = await rating_repository.get_ratings_for_user(user_id)

        by_slug = {r.slug: (r.movie_id, r.rating) for r in ratings}
        assert by_slug == {
            "the-matrix-1999": (matrix.id, 5),
            "heat-1995": (heat.id, 3),
        }

    async def test_get_ratings_for_user_without_any(self, rating_repository, user_id):
        assert await rating_repository.get_ratings_for_user(user_id) == []


async def test_upsert_statement_rejects_unknown_dialect():
    with pytest.raises(NotImplementedError):
        upsert_statement("oracle", {"userid": uuid.uuid4(), "movieid": uuid.uuid4(), "rating": 1})


@pytest.mark.parametrize(
    "dialect_name, rowcount, expected",
    [
        ("sqlite", 1, True),
        ("sqlite", 0, False),
        ("postgresql", 1, True),
        # ON DUPLICATE KEY UPDATE counts an unchanged row as 0
        ("mysql", 0, True),
        ("mysql", 2, True),
    ],
)
async def test_upsert_stored(dialect_name, rowcount, expected):
    assert upsert_stored(dialect_name, rowcount) is expected
