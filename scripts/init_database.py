#!/usr/bin/env python
"""
Database initialization script for the movie catalog.

Creates the movies, genres and ratings tables and optionally loads a few
sample movies through the movie service, so seeding goes through the same
validation as API writes.

Usage:
    # Create tables (keeps existing data)
    python scripts/init_database.py

    # Drop everything, recreate, and add sample movies
    python scripts/init_database.py --reset --seed
"""

import sys
import asyncio
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.api.config import get_database_url
from catalog.database import DatabaseManager, init_database, verify_schema
from catalog.domain import Movie
from catalog.errors import ConflictError
from catalog.repositories import MovieRepository, RatingRepository
from catalog.services import MovieService


SAMPLE_MOVIES = [
    ("The Matrix", 1999, {"Action", "Sci-Fi"}),
    ("Inception", 2010, {"Action", "Sci-Fi", "Thriller"}),
    ("Spirited Away", 2001, {"Animation", "Fantasy"}),
    ("Heat", 1995, {"Crime", "Drama"}),
]


def print_section(title):
    """Print a formatted section header."""
    print(f"\n{'='*60}")
    print(f"{title}")
    print('='*60)


async def seed_movies(db_manager: DatabaseManager) -> int:
    """
    Add the sample movies, skipping any whose slug already exists.

    Returns:
        Number of movies created
    """
    service = MovieService(MovieRepository(db_manager), RatingRepository(db_manager))
    created = 0
    for title, year, genres in SAMPLE_MOVIES:
        movie = Movie(title=title, year_of_release=year, genres=genres)
        try:
            if await service.create(movie):
                created += 1
                print(f"  + {movie.slug}")
        except ConflictError:
            print(f"  = {movie.slug} (already present)")
    return created


async def run(args) -> bool:
    db_manager = DatabaseManager(args.database_url)
    try:
        print_section("Schema")
        await init_database(db_manager, reset=args.reset)

        if args.seed:
            print_section("Sample movies")
            count = await seed_movies(db_manager)
            print(f"Created {count} movie(s)")

        ok = await verify_schema(db_manager)
        print("\n[SUCCESS] Database ready" if ok else "\n[ERROR] Schema incomplete")
        return ok
    finally:
        await db_manager.close()


def main():
    parser = argparse.ArgumentParser(description="Initialize the movie catalog database")
    parser.add_argument("--database-url", default=get_database_url(),
                        help="Async SQLAlchemy URL (default: DATABASE_URL or data/catalog.db)")
    parser.add_argument("--reset", action="store_true", help="Drop all tables first")
    parser.add_argument("--seed", action="store_true", help="Insert sample movies")
    args = parser.parse_args()

    success = asyncio.run(run(args))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
