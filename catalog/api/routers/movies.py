"""
Movie API endpoints.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from catalog.api import mapping
from catalog.api.dependencies import get_movie_service, get_user_id
from catalog.api.models import (
    CreateMovieRequest,
    MovieResponse,
    MoviesResponse,
    UpdateMovieRequest,
)
from catalog.domain import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from catalog.services import MovieService

router = APIRouter(prefix="/api/movies", tags=["movies"])


@router.post("", response_model=MovieResponse, status_code=201)
async def create_movie(
    movie_in: CreateMovieRequest,
    response: Response,
    service: MovieService = Depends(get_movie_service),
):
    """Create a movie; its slug is derived from title and year."""
    movie = mapping.create_request_to_movie(movie_in)
    await service.create(movie)
    response.headers["Location"] = f"{router.prefix}/{movie.id}"
    return mapping.movie_to_response(movie)


@router.get("", response_model=MoviesResponse)
async def list_movies(
    title: Optional[str] = Query(None),
    year: Optional[int] = Query(None),
    sort_by: Optional[str] = Query(None, description="Field name, '-' prefix for descending"),
    page: int = Query(DEFAULT_PAGE),
    page_size: int = Query(DEFAULT_PAGE_SIZE),
    user_id: Optional[uuid.UUID] = Depends(get_user_id),
    service: MovieService = Depends(get_movie_service),
):
    """List movies with filtering, sorting and pagination."""
    options = mapping.query_to_options(title, year, sort_by, page, page_size).with_user(user_id)
    movies = await service.get_all(options)
    total = await service.get_count(options.title, options.year_of_release)
    return mapping.movies_to_response(movies, page, page_size, total)


@router.get("/{id_or_slug}", response_model=MovieResponse)
async def get_movie(
    id_or_slug: str,
    user_id: Optional[uuid.UUID] = Depends(get_user_id),
    service: MovieService = Depends(get_movie_service),
):
    """Get a movie by id or by slug."""
    try:
        movie_id = uuid.UUID(id_or_slug)
    except ValueError:
        movie = await service.get_by_slug(id_or_slug, user_id)
    else:
        movie = await service.get_by_id(movie_id, user_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    return mapping.movie_to_response(movie)


@router.put("/{movie_id}", response_model=MovieResponse)
async def update_movie(
    movie_id: uuid.UUID,
    movie_in: UpdateMovieRequest,
    user_id: Optional[uuid.UUID] = Depends(get_user_id),
    service: MovieService = Depends(get_movie_service),
):
    """Replace a movie's title, year and genres."""
    movie = mapping.update_request_to_movie(movie_in, movie_id)
    updated = await service.update(movie, user_id)
    if updated is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    return mapping.movie_to_response(updated)


@router.delete("/{movie_id}")
async def delete_movie(
    movie_id: uuid.UUID,
    service: MovieService = Depends(get_movie_service),
):
    """Delete a movie with its genres and ratings."""
    if not await service.delete(movie_id):
        raise HTTPException(status_code=404, detail="Movie not found")
    return {"deleted": True}
