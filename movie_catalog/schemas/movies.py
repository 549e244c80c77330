"""Request/response schemas for movie endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

TITLE_MAX_LENGTH = 255
TRAILER_MAX_LENGTH = 1024


class MovieRating(BaseModel):
    """Third-party scores; either may be missing."""

    imdb: float | None = Field(default=None, ge=0, le=10)
    rotten_tomatoes: float | None = Field(default=None, ge=0, le=100)


class MovieForm(BaseModel):
    """Movie fields for create and update (multipart form, image sent separately)."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    year: int = Field(..., ge=1870, le=2200, description="Release year")
    description: str | None = Field(default=None, description="Short synopsis")
    genre: list[str] = Field(..., min_length=1, description="One or more genres")
    trailer: str = Field(..., min_length=1, max_length=TRAILER_MAX_LENGTH, description="Trailer URL")
    rating: MovieRating = Field(default_factory=MovieRating)

    @field_validator("title", "trailer", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("genre")
    @classmethod
    def clean_genres(cls, v: list[str]) -> list[str]:
        cleaned = [g.strip() for g in v if g and g.strip()]
        if not cleaned:
            raise ValueError("At least one non-empty genre is required.")
        return cleaned


class MovieOut(BaseModel):
    """Movie as returned by the API, whichever store it came from."""

    id: str
    title: str
    year: int
    description: str | None = None
    genre: list[str]
    trailer: str
    image: str
    rating: MovieRating = Field(default_factory=MovieRating)
    created_at: datetime | None = None


class MovieMutationResponse(BaseModel):
    """Response for create/update/delete: confirmation message plus the affected movie."""

    message: str
    movie: MovieOut
