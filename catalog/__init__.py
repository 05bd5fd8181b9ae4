"""
Movie catalog package.

Movies with genre tags and per-user ratings, stored in a relational database
through async SQLAlchemy.
"""

__version__ = "1.0.0"
