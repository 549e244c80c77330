"""Movie persistence: the movies table or a flat JSON file, behind one interface."""

import json
import logging
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

from sqlalchemy.orm import Session

from movie_catalog.models import Movie
from movie_catalog.schemas.movies import MovieForm, MovieOut, MovieRating

logger = logging.getLogger(__name__)


class MovieRepository(Protocol):
    """Storage operations used by the movie routes. Unknown ids yield None."""

    def list_all(self) -> list[MovieOut]: ...

    def get(self, movie_id: str) -> MovieOut | None: ...

    def create(self, data: MovieForm, image: str) -> MovieOut: ...

    def update(self, movie_id: str, data: MovieForm, image: str) -> MovieOut | None: ...

    def delete(self, movie_id: str) -> MovieOut | None: ...


def movie_row_to_out(row: Movie) -> MovieOut:
    """Map an ORM row to the API shape (flat rating columns become a nested object)."""
    return MovieOut(
        id=row.id,
        title=row.title,
        year=row.year,
        description=row.description,
        genre=list(row.genre or []),
        trailer=row.trailer,
        image=row.image,
        rating=MovieRating(imdb=row.rating_imdb, rotten_tomatoes=row.rating_rotten_tomatoes),
        created_at=row.created_at,
    )


class SqlMovieRepository:
    """Movies stored in the relational database."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_all(self) -> list[MovieOut]:
        rows = self.db.query(Movie).order_by(Movie.created_at, Movie.title).all()
        return [movie_row_to_out(r) for r in rows]

    def get(self, movie_id: str) -> MovieOut | None:
        row = self.db.get(Movie, movie_id)
        return movie_row_to_out(row) if row is not None else None

    def create(self, data: MovieForm, image: str) -> MovieOut:
        row = Movie(image=image)
        self._apply(row, data)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return movie_row_to_out(row)

    def update(self, movie_id: str, data: MovieForm, image: str) -> MovieOut | None:
        row = self.db.get(Movie, movie_id)
        if row is None:
            return None
        self._apply(row, data)
        row.image = image
        self.db.commit()
        self.db.refresh(row)
        return movie_row_to_out(row)

    def delete(self, movie_id: str) -> MovieOut | None:
        row = self.db.get(Movie, movie_id)
        if row is None:
            return None
        out = movie_row_to_out(row)
        self.db.delete(row)
        self.db.commit()
        return out

    @staticmethod
    def _apply(row: Movie, data: MovieForm) -> None:
        row.title = data.title
        row.year = data.year
        row.description = data.description
        row.genre = list(data.genre)
        row.trailer = data.trailer
        row.rating_imdb = data.rating.imdb
        row.rating_rotten_tomatoes = data.rating.rotten_tomatoes


class JsonMovieRepository:
    """
    Movies stored as a JSON array in a single file.

    Every call reads the whole file and mutations rewrite it; there is no locking,
    so concurrent writers can lose updates.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def list_all(self) -> list[MovieOut]:
        return [MovieOut.model_validate(item) for item in self._read()]

    def get(self, movie_id: str) -> MovieOut | None:
        for item in self._read():
            if item.get("id") == movie_id:
                return MovieOut.model_validate(item)
        return None

    def create(self, data: MovieForm, image: str) -> MovieOut:
        movie = MovieOut(
            id=str(uuid.uuid4()),
            image=image,
            created_at=datetime.now(UTC),
            **data.model_dump(),
        )
        items = self._read()
        items.append(movie.model_dump(mode="json"))
        self._write(items)
        return movie

    def update(self, movie_id: str, data: MovieForm, image: str) -> MovieOut | None:
        items = self._read()
        for i, item in enumerate(items):
            if item.get("id") == movie_id:
                movie = MovieOut(
                    id=movie_id,
                    image=image,
                    created_at=item.get("created_at"),
                    **data.model_dump(),
                )
                items[i] = movie.model_dump(mode="json")
                self._write(items)
                return movie
        return None

    def delete(self, movie_id: str) -> MovieOut | None:
        items = self._read()
        for i, item in enumerate(items):
            if item.get("id") == movie_id:
                removed = items.pop(i)
                self._write(items)
                return MovieOut.model_validate(removed)
        return None

    def _read(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return []
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"{self.path} must contain a JSON array of movies")
        return data

    def _write(self, items: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.debug("Wrote %d movies to %s", len(items), self.path)
