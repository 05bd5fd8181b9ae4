"""
API route handlers.
"""

from catalog.api.routers import movies, ratings, system

__all__ = ["movies", "ratings", "system"]
