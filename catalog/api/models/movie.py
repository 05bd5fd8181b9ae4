"""
Pydantic schemas for Movie API.
"""

import uuid

from pydantic import BaseModel, Field


class CreateMovieRequest(BaseModel):
    """Request body for creating a movie."""

    title: str
    year_of_release: int
    genres: list[str] = Field(default_factory=list)


class UpdateMovieRequest(BaseModel):
    """Request body for replacing a movie's fields and genres."""

    title: str
    year_of_release: int
    genres: list[str] = Field(default_factory=list)


class MovieResponse(BaseModel):
    """Response model for a single movie."""

    id: uuid.UUID
    title: str
    slug: str
    year_of_release: int
    rating: float | None = None
    user_rating: int | None = None
    genres: list[str]


class MoviesResponse(BaseModel):
    """One page of movies with the total number of matches."""

    items: list[MovieResponse]
    page: int
    page_size: int
    total: int
