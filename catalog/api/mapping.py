"""
Conversions between API schemas and domain types.
"""

import uuid
from typing import Iterable, Optional

from catalog.api.models import (
    CreateMovieRequest,
    MovieRatingResponse,
    MovieResponse,
    MoviesResponse,
    UpdateMovieRequest,
)
from catalog.domain import GetAllMoviesOptions, Movie, MovieRating, SortOrder


def create_request_to_movie(request: CreateMovieRequest) -> Movie:
    """New movies get a fresh id here, before validation."""
    return Movie(
        id=uuid.uuid4(),
        title=request.title,
        year_of_release=request.year_of_release,
        genres=set(request.genres),
    )


def update_request_to_movie(request: UpdateMovieRequest, movie_id: uuid.UUID) -> Movie:
    return Movie(
        id=movie_id,
        title=request.title,
        year_of_release=request.year_of_release,
        genres=set(request.genres),
    )


def movie_to_response(movie: Movie) -> MovieResponse:
    return MovieResponse(
        id=movie.id,
        title=movie.title,
        slug=movie.slug,
        year_of_release=movie.year_of_release,
        rating=movie.rating,
        user_rating=movie.user_rating,
        genres=sorted(movie.genres),
    )


def movies_to_response(
    movies: Iterable[Movie],
    page: int,
    page_size: int,
    total: int,
) -> MoviesResponse:
    return MoviesResponse(
        items=[movie_to_response(m) for m in movies],
        page=page,
        page_size=page_size,
        total=total,
    )


def rating_to_response(rating: MovieRating) -> MovieRatingResponse:
    return MovieRatingResponse(movie_id=rating.movie_id, slug=rating.slug, rating=rating.rating)


def parse_sort_by(sort_by: Optional[str]) -> tuple[Optional[str], SortOrder]:
    """
    Split a ``sortBy`` value into field and direction.

    A leading '-' sorts descending, a leading '+' or no prefix ascending.
    """
    if sort_by is None:
        return None, SortOrder.UNSORTED
    order = SortOrder.DESCENDING if sort_by.startswith("-") else SortOrder.ASCENDING
    return sort_by.strip("+-"), order


def query_to_options(
    title: Optional[str],
    year: Optional[int],
    sort_by: Optional[str],
    page: int,
    page_size: int,
) -> GetAllMoviesOptions:
    sort_field, sort_order = parse_sort_by(sort_by)
    return GetAllMoviesOptions(
        title=title,
        year_of_release=year,
        sort_field=sort_field,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )
