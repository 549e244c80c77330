"""Dependency providers for FastAPI routes (storage collaborators)."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from movie_catalog.core.config import Settings, get_settings
from movie_catalog.core.database import get_db
from movie_catalog.services.file_storage import FileStorage
from movie_catalog.services.movie_store import (
    JsonMovieRepository,
    MovieRepository,
    SqlMovieRepository,
)


def get_file_storage(
    settings: Annotated[Settings, Depends(get_settings)],
) -> FileStorage:
    """File storage rooted at UPLOAD_DIR."""
    return FileStorage(settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)


def get_movie_repository(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MovieRepository:
    """Movie repository selected by MOVIE_STORE, bound to the request's DB session."""
    if settings.MOVIE_STORE == "json":
        return JsonMovieRepository(settings.MOVIES_JSON_PATH)
    return SqlMovieRepository(db)


FileStorageDep = Annotated[FileStorage, Depends(get_file_storage)]
MovieRepositoryDep = Annotated[MovieRepository, Depends(get_movie_repository)]
