"""Movie catalog routes. Reading the list needs any role; everything else is admin-only."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from movie_catalog.api.v1.auth import AdminOnly, AnyUser, uploaded
from movie_catalog.core.dependencies import FileStorageDep, MovieRepositoryDep
from movie_catalog.schemas.movies import MovieForm, MovieMutationResponse, MovieOut
from movie_catalog.services import movies as movie_service

router = APIRouter()


def movie_form(
    title: Annotated[str, Form()] = "",
    year: Annotated[str, Form()] = "",
    trailer: Annotated[str, Form()] = "",
    genre: Annotated[list[str] | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    rating_imdb: Annotated[str | None, Form()] = None,
    rating_rotten_tomatoes: Annotated[str | None, Form()] = None,
) -> MovieForm:
    """Collect movie form fields into a MovieForm, reporting every invalid field at once."""
    try:
        return MovieForm(
            title=title,
            year=year,
            trailer=trailer,
            genre=genre or [],
            description=description or None,
            rating={
                "imdb": rating_imdb or None,
                "rotten_tomatoes": rating_rotten_tomatoes or None,
            },
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


@router.get("", response_model=list[MovieOut])
def list_movies(_claims: AnyUser, repo: MovieRepositoryDep) -> list[MovieOut]:
    """Return every movie in the catalog."""
    return repo.list_all()


@router.get("/{movie_id}", response_model=MovieOut)
def get_movie(movie_id: str, _admin: AdminOnly, repo: MovieRepositoryDep) -> MovieOut:
    return movie_service.get_movie(repo, movie_id)


@router.post("", response_model=MovieMutationResponse, status_code=status.HTTP_201_CREATED)
def create_movie(
    _admin: AdminOnly,
    form: Annotated[MovieForm, Depends(movie_form)],
    repo: MovieRepositoryDep,
    storage: FileStorageDep,
    image: Annotated[UploadFile | None, File()] = None,
) -> MovieMutationResponse:
    """
    Create a movie from multipart form fields. Send ``genre`` once per genre and
    an optional ``image`` poster; without one the default poster is used.
    """
    movie = movie_service.create_movie(repo, form, storage, uploaded(image))
    return MovieMutationResponse(message="Movie created successfully", movie=movie)


@router.put("/{movie_id}", response_model=MovieMutationResponse)
def update_movie(
    movie_id: str,
    _admin: AdminOnly,
    form: Annotated[MovieForm, Depends(movie_form)],
    repo: MovieRepositoryDep,
    storage: FileStorageDep,
    image: Annotated[UploadFile | None, File()] = None,
) -> MovieMutationResponse:
    """Replace all movie fields; a new ``image`` replaces the stored poster."""
    movie = movie_service.update_movie(repo, movie_id, form, storage, uploaded(image))
    return MovieMutationResponse(message="Movie updated successfully", movie=movie)


@router.delete("/{movie_id}", response_model=MovieMutationResponse)
def delete_movie(
    movie_id: str,
    _admin: AdminOnly,
    repo: MovieRepositoryDep,
    storage: FileStorageDep,
) -> MovieMutationResponse:
    movie = movie_service.delete_movie(repo, movie_id, storage)
    return MovieMutationResponse(message="Movie deleted successfully", movie=movie)
