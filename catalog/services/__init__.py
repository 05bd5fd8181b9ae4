"""
Services: validation and orchestration on top of the repositories.
"""

from catalog.services.movie_service import MovieService
from catalog.services.rating_service import RatingService

__all__ = ['MovieService', 'RatingService']
