"""
System API endpoints (health).
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from catalog.api.dependencies import get_db_manager
from catalog.database.connection import DatabaseManager
from catalog.errors import TransientStorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
async def health_check(db_manager: DatabaseManager = Depends(get_db_manager)):
    """Health check: can the database answer a trivial query."""
    try:
        async with db_manager.connection() as conn:
            await conn.execute(text("SELECT 1"))
    except TransientStorageError as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse(status_code=503, content={"status": "unhealthy", "database": str(e)})
    return {"status": "healthy", "database": "connected"}
