"""
SQLAlchemy ORM models for the catalog database.

This module defines the movies, genres and ratings tables. Genres and ratings
belong to exactly one movie and are removed with it.
"""

import uuid

from sqlalchemy import (
    CheckConstraint, ForeignKey, Index, Integer, PrimaryKeyConstraint, String, Uuid
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class MovieRecord(Base):
    """
    Movie table.

    Attributes:
        id: Primary key (UUID assigned by the caller)
        slug: Unique identifier derived from title and year
        title: Movie title
        yearofrelease: Year the movie was released
    """
    __tablename__ = 'movies'

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    yearofrelease: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        Index('movies_slug_idx', 'slug', unique=True),
    )

    def __repr__(self) -> str:
        return f"<MovieRecord(id={self.id}, slug='{self.slug}')>"


class GenreRecord(Base):
    """
    Genre tags, one row per (movie, genre name).

    The table has no natural key of its own, so a surrogate id is used.
    """
    __tablename__ = 'genres'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movieid: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey('movies.id', ondelete='CASCADE'),
        nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index('idx_genres_movie', 'movieid'),
    )

    def __repr__(self) -> str:
        return f"<GenreRecord(movieid={self.movieid}, name='{self.name}')>"


class RatingRecord(Base):
    """
    Per-user movie ratings.

    The composite primary key (userid, movieid) allows one rating per user and
    movie; it is also the conflict target for upserts.
    """
    __tablename__ = 'ratings'

    userid: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    movieid: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey('movies.id', ondelete='CASCADE'),
        nullable=False
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint('userid', 'movieid', name='pk_ratings'),
        CheckConstraint("rating >= 1 AND rating <= 5", name='check_rating_range'),
        Index('idx_ratings_movie', 'movieid'),
    )

    def __repr__(self) -> str:
        return f"<RatingRecord(userid={self.userid}, movieid={self.movieid}, rating={self.rating})>"
