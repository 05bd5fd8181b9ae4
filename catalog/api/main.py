"""
FastAPI application entry point for the movie catalog API.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog.api.config import get_api_host, get_api_port, get_database_url, get_sql_echo
from catalog.api.models import ValidationFailureList, ValidationFailureResponse
from catalog.api.routers import movies, ratings, system
from catalog.database import DatabaseManager, init_database
from catalog.errors import ConflictError, TransientStorageError, ValidationError
from catalog.repositories import MovieRepository, RatingRepository
from catalog.services import MovieService, RatingService

logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """
    Build the application.

    Args:
        database_url: Async SQLAlchemy URL; defaults to the configured one

    Returns:
        FastAPI app whose lifespan owns the database engine
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db_manager = DatabaseManager(database_url or get_database_url(), echo=get_sql_echo())
        await init_database(db_manager)

        movie_repository = MovieRepository(db_manager)
        rating_repository = RatingRepository(db_manager)
        app.state.db_manager = db_manager
        app.state.movie_service = MovieService(movie_repository, rating_repository)
        app.state.rating_service = RatingService(movie_repository, rating_repository)
        try:
            yield
        finally:
            await db_manager.close()

    app = FastAPI(
        title="Movie Catalog API",
        description="Movies, genres and user ratings",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        body = ValidationFailureList(
            errors=[ValidationFailureResponse(field=f.field, message=f.message) for f in exc.failures]
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(ConflictError)
    async def conflict_error_handler(request: Request, exc: ConflictError):
        return JSONResponse(status_code=409, content={"detail": "Resource already exists"})

    @app.exception_handler(TransientStorageError)
    async def storage_error_handler(request: Request, exc: TransientStorageError):
        logger.error("Storage unavailable for %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})

    app.include_router(movies.router)
    app.include_router(ratings.router)
    app.include_router(system.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Movie Catalog API",
            "docs": "/docs",
            "health": "/api/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from catalog.utils.logging_config import configure_api_logging

    configure_api_logging()
    uvicorn.run(app, host=get_api_host(), port=get_api_port())
