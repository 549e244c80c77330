"""Comment routes; only the USER role may read or write comments."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from movie_catalog.api.v1.auth import require_roles
from movie_catalog.core.database import get_db
from movie_catalog.core.dependencies import MovieRepositoryDep
from movie_catalog.models.user import UserRole
from movie_catalog.schemas.auth import TokenClaims
from movie_catalog.schemas.comments import (
    CommentCreate,
    CommentMutationResponse,
    CommentOut,
    CommentUpdate,
)
from movie_catalog.services import comments as comment_service

router = APIRouter()

Commenter = Annotated[TokenClaims, Depends(require_roles(UserRole.USER))]


@router.post("", response_model=CommentMutationResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    body: CommentCreate,
    claims: Commenter,
    db: Annotated[Session, Depends(get_db)],
    movies: MovieRepositoryDep,
) -> CommentMutationResponse:
    """Comment on a movie as the token's user."""
    comment = comment_service.create_comment(db, movies, claims, body)
    return CommentMutationResponse(
        message="Comment created successfully", comment=CommentOut.model_validate(comment)
    )


@router.get("/{movie_id}", response_model=list[CommentOut])
def list_comments(
    movie_id: str,
    _claims: Commenter,
    db: Annotated[Session, Depends(get_db)],
) -> list[CommentOut]:
    """Comments for one movie, oldest first."""
    return [CommentOut.model_validate(c) for c in comment_service.list_comments(db, movie_id)]


@router.put("/{comment_id}", response_model=CommentMutationResponse)
def update_comment(
    comment_id: str,
    body: CommentUpdate,
    _claims: Commenter,
    db: Annotated[Session, Depends(get_db)],
) -> CommentMutationResponse:
    comment = comment_service.update_comment(db, comment_id, body)
    return CommentMutationResponse(
        message="Comment updated successfully", comment=CommentOut.model_validate(comment)
    )


@router.delete("/{comment_id}", response_model=CommentMutationResponse)
def delete_comment(
    comment_id: str,
    _claims: Commenter,
    db: Annotated[Session, Depends(get_db)],
) -> CommentMutationResponse:
    comment = comment_service.delete_comment(db, comment_id)
    return CommentMutationResponse(message="Comment deleted successfully", comment=comment)
