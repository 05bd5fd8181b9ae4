"""
Domain types shared by the repositories and services.
"""

import re
import uuid
from enum import Enum
from typing import Optional, Set

from pydantic import BaseModel, Field


_SLUG_STRIP = re.compile(r"[^0-9A-Za-z _-]")


def make_slug(title: str, year_of_release: int) -> str:
    """Derive the URL-friendly identifier for a title and release year."""
    cleaned = _SLUG_STRIP.sub("", title).lower().replace(" ", "-")
    return f"{cleaned}-{year_of_release}"


class Movie(BaseModel):
    """
    A catalog movie.

    ``rating`` is the mean of all stored ratings and ``user_rating`` the
    acting user's own rating. Both are read-side values and are never
    written through the movie repository.
    """

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    title: str
    year_of_release: int
    genres: Set[str] = Field(default_factory=set)
    rating: Optional[float] = None
    user_rating: Optional[int] = None

    @property
    def slug(self) -> str:
        return make_slug(self.title, self.year_of_release)


class MovieRating(BaseModel):
    """One rating submitted by a user, with the rated movie's slug."""

    movie_id: uuid.UUID
    slug: str
    rating: int


class SortField(str, Enum):
    """Columns a movie listing may be sorted by."""

    TITLE = "title"
    YEAR_OF_RELEASE = "yearofrelease"


class SortOrder(Enum):
    UNSORTED = 0
    ASCENDING = 1
    DESCENDING = 2


DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 25


class GetAllMoviesOptions(BaseModel):
    """
    Filter, sort and paging parameters for a movie listing.

    ``sort_field`` holds the caller's raw text until the options validator has
    accepted it; the repository only ever maps accepted values to columns.
    """

    title: Optional[str] = None
    year_of_release: Optional[int] = None
    sort_field: Optional[str] = None
    sort_order: SortOrder = SortOrder.UNSORTED
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    user_id: Optional[uuid.UUID] = None

    def with_user(self, user_id: Optional[uuid.UUID]) -> "GetAllMoviesOptions":
        self.user_id = user_id
        return self
