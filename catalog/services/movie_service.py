"""
Movie lifecycle service.
"""

import logging
import uuid
from typing import List, Optional

from catalog.domain import GetAllMoviesOptions, Movie
from catalog.repositories import MovieRepository, RatingRepository
from catalog.validation import Validator, movie_validator, options_validator

logger = logging.getLogger(__name__)


class MovieService:
    """
    Validates movie input and listing options, then delegates to the
    repositories.

    Validation always runs before any storage access; a rejected movie never
    reaches the database.
    """

    def __init__(
        self,
        movie_repository: MovieRepository,
        rating_repository: RatingRepository,
        movie_rules: Optional[Validator[Movie]] = None,
        options_rules: Optional[Validator[GetAllMoviesOptions]] = None,
    ):
        self.movie_repository = movie_repository
        self.rating_repository = rating_repository
        self.movie_validator = movie_rules or movie_validator()
        self.options_validator = options_rules or options_validator()

    async def create(self, movie: Movie) -> bool:
        """
        Validate and store a new movie.

        Raises:
            ValidationError: If the movie is rejected
            ConflictError: If its slug is already taken
        """
        self.movie_validator.validate_and_raise(movie)
        return await self.movie_repository.create(movie)

    async def get_by_id(
        self,
        movie_id: uuid.UUID,
        user_id: Optional[uuid.UUID] = None,
    ) -> Optional[Movie]:
        return await self.movie_repository.get_by_id(movie_id, user_id)

    async def get_by_slug(
        self,
        slug: str,
        user_id: Optional[uuid.UUID] = None,
    ) -> Optional[Movie]:
        return await self.movie_repository.get_by_slug(slug, user_id)

    async def get_all(self, options: GetAllMoviesOptions) -> List[Movie]:
        self.options_validator.validate_and_raise(options)
        return await self.movie_repository.get_all(options)

    async def get_count(
        self,
        title: Optional[str] = None,
        year_of_release: Optional[int] = None,
    ) -> int:
        """Total number of movies matching the filters, ignoring paging."""
        self.options_validator.validate_and_raise(
            GetAllMoviesOptions(title=title, year_of_release=year_of_release)
        )
        return await self.movie_repository.count(title, year_of_release)

    async def update(
        self,
        movie: Movie,
        user_id: Optional[uuid.UUID] = None,
    ) -> Optional[Movie]:
        """
        Validate and persist changes to an existing movie.

        The returned movie carries a freshly read aggregate rating (and the
        user's own rating when ``user_id`` is given). That read happens after
        the write commits, so a rating submitted concurrently may or may not
        be reflected.

        Returns:
            The updated movie, or None if no movie has this id
        """
        self.movie_validator.validate_and_raise(movie)

        if not await self.movie_repository.exists_by_id(movie.id):
            logger.info("Update rejected, movie %s does not exist", movie.id)
            return None

        await self.movie_repository.update(movie)

        if user_id is None:
            movie.rating = await self.rating_repository.get_rating(movie.id)
            return movie

        movie.rating, movie.user_rating = await self.rating_repository.get_rating_for_user(
            movie.id, user_id
        )
        return movie

    async def delete(self, movie_id: uuid.UUID) -> bool:
        """Delete a movie. False means it did not exist."""
        return await self.movie_repository.delete(movie_id)
