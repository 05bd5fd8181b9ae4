"""
Pydantic schemas for API request/response validation.
"""

from catalog.api.models.movie import (
    CreateMovieRequest,
    UpdateMovieRequest,
    MovieResponse,
    MoviesResponse,
)
from catalog.api.models.rating import RateMovieRequest, MovieRatingResponse, MovieRatingsResponse
from catalog.api.models.errors import ValidationFailureResponse, ValidationFailureList

__all__ = [
    "CreateMovieRequest",
    "UpdateMovieRequest",
    "MovieResponse",
    "MoviesResponse",
    "RateMovieRequest",
    "MovieRatingResponse",
    "MovieRatingsResponse",
    "ValidationFailureResponse",
    "ValidationFailureList",
]
