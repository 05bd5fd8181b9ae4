"""
FastAPI dependency injection for services and the acting user.

Services are built once in the application lifespan and kept on
``app.state``; these functions only hand them out.
"""

import logging
import uuid
from typing import Optional

from fastapi import Header, HTTPException, Request

from catalog.database.connection import DatabaseManager
from catalog.services import MovieService, RatingService

logger = logging.getLogger(__name__)


def get_db_manager(request: Request) -> DatabaseManager:
    return request.app.state.db_manager


def get_movie_service(request: Request) -> MovieService:
    return request.app.state.movie_service


def get_rating_service(request: Request) -> RatingService:
    return request.app.state.rating_service


def get_user_id(x_user_id: Optional[str] = Header(None)) -> Optional[uuid.UUID]:
    """Acting user from the X-User-Id header, or None for anonymous calls."""
    if x_user_id is None:
        return None
    try:
        return uuid.UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="X-User-Id must be a UUID") from None


def require_user_id(x_user_id: Optional[str] = Header(None)) -> uuid.UUID:
    """Like ``get_user_id`` but rejects anonymous calls."""
    user_id = get_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(status_code=401, detail="X-User-Id header is required")
    return user_id
