"""SQLAlchemy ORM models."""

from movie_catalog.models.base import Base
from movie_catalog.models.comment import Comment
from movie_catalog.models.movie import Movie
from movie_catalog.models.user import User, UserRole

__all__ = ["Base", "Comment", "Movie", "User", "UserRole"]
