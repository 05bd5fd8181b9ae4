"""
Repositories: query composition and transactional writes over the catalog
tables.
"""

from catalog.repositories.movie_repository import MovieRepository
from catalog.repositories.rating_repository import RatingRepository

__all__ = ['MovieRepository', 'RatingRepository']
