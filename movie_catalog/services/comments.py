"""Comment operations for movies."""

import logging

from sqlalchemy.orm import Session

from movie_catalog.core.exceptions import NotFoundError
from movie_catalog.models import Comment
from movie_catalog.schemas.auth import TokenClaims
from movie_catalog.schemas.comments import CommentCreate, CommentOut, CommentUpdate
from movie_catalog.services.movies import get_movie
from movie_catalog.services.movie_store import MovieRepository

logger = logging.getLogger(__name__)

COMMENT_NOT_FOUND = "Comment not found"


def _get_comment(db: Session, comment_id: str) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError(COMMENT_NOT_FOUND)
    return comment


def create_comment(
    db: Session,
    movies: MovieRepository,
    author: TokenClaims,
    body: CommentCreate,
) -> Comment:
    """Attach a comment by the token's user to an existing movie."""
    get_movie(movies, body.movie_id)
    comment = Comment(text=body.text, user_id=author.id, movie_id=body.movie_id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("User id=%s commented on movie id=%s", author.id, body.movie_id)
    return comment


def list_comments(db: Session, movie_id: str) -> list[Comment]:
    return (
        db.query(Comment)
        .filter(Comment.movie_id == movie_id)
        .order_by(Comment.created_at, Comment.id)
        .all()
    )


def update_comment(db: Session, comment_id: str, body: CommentUpdate) -> Comment:
    comment = _get_comment(db, comment_id)
    comment.text = body.text
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, comment_id: str) -> CommentOut:
    comment = _get_comment(db, comment_id)
    # Snapshot before delete; the instance is expired after commit.
    out = CommentOut.model_validate(comment)
    db.delete(comment)
    db.commit()
    return out
