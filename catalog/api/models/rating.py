"""
Pydantic schemas for Rating API.
"""

import uuid

from pydantic import BaseModel


class RateMovieRequest(BaseModel):
    """Request body for rating a movie. Range is checked by the rating service."""

    rating: int


class MovieRatingResponse(BaseModel):
    """A rating the current user has given."""

    movie_id: uuid.UUID
    slug: str
    rating: int


class MovieRatingsResponse(BaseModel):
    items: list[MovieRatingResponse]
