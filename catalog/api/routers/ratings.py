"""
Rating API endpoints.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException

from catalog.api import mapping
from catalog.api.dependencies import get_rating_service, require_user_id
from catalog.api.models import MovieRatingsResponse, RateMovieRequest
from catalog.services import RatingService

router = APIRouter(prefix="/api", tags=["ratings"])


@router.put("/movies/{movie_id}/ratings")
async def rate_movie(
    movie_id: uuid.UUID,
    rating_in: RateMovieRequest,
    user_id: uuid.UUID = Depends(require_user_id),
    service: RatingService = Depends(get_rating_service),
):
    """Rate a movie, replacing the caller's earlier rating if any."""
    if not await service.rate_movie(movie_id, rating_in.rating, user_id):
        raise HTTPException(status_code=404, detail="Movie not found")
    return {"rated": True}


@router.delete("/movies/{movie_id}/ratings")
async def delete_rating(
    movie_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_user_id),
    service: RatingService = Depends(get_rating_service),
):
    """Remove the caller's rating for a movie."""
    if not await service.delete_rating(movie_id, user_id):
        raise HTTPException(status_code=404, detail="Rating not found")
    return {"deleted": True}


@router.get("/ratings/me", response_model=MovieRatingsResponse)
async def get_user_ratings(
    user_id: uuid.UUID = Depends(require_user_id),
    service: RatingService = Depends(get_rating_service),
):
    """Get every rating the caller has submitted."""
    ratings = await service.get_ratings_for_user(user_id)
    return MovieRatingsResponse(items=[mapping.rating_to_response(r) for r in ratings])
