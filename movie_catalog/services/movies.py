"""Movie operations: wrap the configured repository with image handling and 404s."""

import logging

from movie_catalog.core.exceptions import NotFoundError
from movie_catalog.models.base import DEFAULT_IMAGE
from movie_catalog.schemas.movies import MovieForm, MovieOut
from movie_catalog.services.file_storage import FileStorage, Upload
from movie_catalog.services.movie_store import MovieRepository

logger = logging.getLogger(__name__)

MOVIE_NOT_FOUND = "Movie not found."


def get_movie(repo: MovieRepository, movie_id: str) -> MovieOut:
    movie = repo.get(movie_id)
    if movie is None:
        raise NotFoundError(MOVIE_NOT_FOUND)
    return movie


def create_movie(
    repo: MovieRepository,
    data: MovieForm,
    storage: FileStorage,
    image: Upload | None = None,
) -> MovieOut:
    """Store the poster (if any) and insert the movie."""
    image_name = storage.save(image) if image is not None else DEFAULT_IMAGE
    movie = repo.create(data, image_name)
    logger.info("Created movie id=%s title=%r", movie.id, movie.title)
    return movie


def update_movie(
    repo: MovieRepository,
    movie_id: str,
    data: MovieForm,
    storage: FileStorage,
    image: Upload | None = None,
) -> MovieOut:
    """Replace the movie's fields; a new poster replaces and releases the old one."""
    existing = get_movie(repo, movie_id)
    image_name = existing.image
    if image is not None:
        image_name = storage.save(image)
    movie = repo.update(movie_id, data, image_name)
    if movie is None:
        raise NotFoundError(MOVIE_NOT_FOUND)
    if image_name != existing.image:
        storage.delete(existing.image)
    logger.info("Updated movie id=%s", movie_id)
    return movie


def delete_movie(repo: MovieRepository, movie_id: str, storage: FileStorage) -> MovieOut:
    movie = repo.delete(movie_id)
    if movie is None:
        raise NotFoundError(MOVIE_NOT_FOUND)
    storage.delete(movie.image)
    logger.info("Deleted movie id=%s", movie_id)
    return movie
