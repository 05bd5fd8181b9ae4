"""
Rating service.
"""

import logging
import uuid
from typing import List

from catalog.domain import MovieRating
from catalog.errors import ValidationError, ValidationFailure
from catalog.repositories import MovieRepository, RatingRepository

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class RatingService:
    def __init__(self, movie_repository: MovieRepository, rating_repository: RatingRepository):
        self.movie_repository = movie_repository
        self.rating_repository = rating_repository

    async def rate_movie(self, movie_id: uuid.UUID, rating: int, user_id: uuid.UUID) -> bool:
        """
        Record a user's rating for a movie.

        Returns:
            False if the movie does not exist, otherwise whether the rating
            was stored

        Raises:
            ValidationError: If rating is outside 1..5
        """
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError([
                ValidationFailure("rating", f"Rating must be between {MIN_RATING} and {MAX_RATING}")
            ])

        if not await self.movie_repository.exists_by_id(movie_id):
            logger.info("Rating rejected, movie %s does not exist", movie_id)
            return False

        return await self.rating_repository.rate_movie(movie_id, rating, user_id)

    async def delete_rating(self, movie_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        return await self.rating_repository.delete_rating(movie_id, user_id)

    async def get_ratings_for_user(self, user_id: uuid.UUID) -> List[MovieRating]:
        return await self.rating_repository.get_ratings_for_user(user_id)
