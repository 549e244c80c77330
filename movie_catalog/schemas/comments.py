"""Request/response schemas for comment endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

TEXT_MAX_LENGTH = 5000


class CommentCreate(BaseModel):
    """New comment; the author is taken from the bearer token."""

    text: str = Field(..., min_length=1, max_length=TEXT_MAX_LENGTH)
    movie_id: str = Field(..., min_length=1, max_length=36)


class CommentUpdate(BaseModel):
    text: str = Field(..., min_length=1, max_length=TEXT_MAX_LENGTH)


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    user_id: str
    movie_id: str
    created_at: datetime | None = None


class CommentMutationResponse(BaseModel):
    message: str
    comment: CommentOut
