"""Tests for both movie repositories and the movie operations that wrap them."""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from movie_catalog.core.exceptions import NotFoundError
from movie_catalog.models.base import DEFAULT_IMAGE
from movie_catalog.schemas.movies import MovieForm
from movie_catalog.services import movies as movie_service
from movie_catalog.services.file_storage import FileStorage
from movie_catalog.services.movie_store import JsonMovieRepository, SqlMovieRepository
from support import FakeUpload, make_session_factory


def _form(**overrides: object) -> MovieForm:
    data: dict = {
        "title": "Alien",
        "year": 1979,
        "genre": ["Horror", "Sci-Fi"],
        "trailer": "https://youtu.be/LjLamj-b0I8",
        "rating": {"imdb": 8.5, "rotten_tomatoes": 93},
    }
    data.update(overrides)
    return MovieForm(**data)


class RepositoryContract:
    """Behavior shared by every MovieRepository implementation."""

    def make_repo(self):
        raise NotImplementedError

    def setUp(self) -> None:
        self.repo = self.make_repo()

    def test_create_and_get(self) -> None:
        created = self.repo.create(_form(), "poster.png")
        self.assertTrue(created.id)
        fetched = self.repo.get(created.id)
        self.assertEqual(fetched.title, "Alien")
        self.assertEqual(fetched.genre, ["Horror", "Sci-Fi"])
        self.assertEqual(fetched.image, "poster.png")
        self.assertEqual(fetched.rating.rotten_tomatoes, 93)

    def test_list_all(self) -> None:
        self.assertEqual(self.repo.list_all(), [])
        a = self.repo.create(_form(), DEFAULT_IMAGE)
        b = self.repo.create(_form(title="Aliens", year=1986), DEFAULT_IMAGE)
        self.assertEqual({m.id for m in self.repo.list_all()}, {a.id, b.id})

    def test_update(self) -> None:
        created = self.repo.create(_form(), DEFAULT_IMAGE)
        updated = self.repo.update(created.id, _form(title="Alien (Director's Cut)"), "new.png")
        self.assertEqual(updated.title, "Alien (Director's Cut)")
        self.assertEqual(self.repo.get(created.id).image, "new.png")

    def test_delete(self) -> None:
        created = self.repo.create(_form(), DEFAULT_IMAGE)
        removed = self.repo.delete(created.id)
        self.assertEqual(removed.id, created.id)
        self.assertIsNone(self.repo.get(created.id))
        self.assertEqual(self.repo.list_all(), [])

    def test_unknown_id_yields_none(self) -> None:
        self.assertIsNone(self.repo.get("missing"))
        self.assertIsNone(self.repo.update("missing", _form(), DEFAULT_IMAGE))
        self.assertIsNone(self.repo.delete("missing"))


class TestSqlMovieRepository(RepositoryContract, unittest.TestCase):
    def make_repo(self):
        self.db = make_session_factory()()
        self.addCleanup(self.db.close)
        return SqlMovieRepository(self.db)


class TestJsonMovieRepository(RepositoryContract, unittest.TestCase):
    def make_repo(self):
        self.path = Path(tempfile.mkdtemp()) / "nested" / "movies.json"
        return JsonMovieRepository(self.path)

    def test_file_is_a_json_array(self) -> None:
        created = self.repo.create(_form(), DEFAULT_IMAGE)
        data = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual([item["id"] for item in data], [created.id])

    def test_update_keeps_created_at(self) -> None:
        created = self.repo.create(_form(), DEFAULT_IMAGE)
        updated = self.repo.update(created.id, _form(year=1980), DEFAULT_IMAGE)
        self.assertEqual(updated.created_at, created.created_at)

    def test_empty_file_reads_as_empty(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("", encoding="utf-8")
        self.assertEqual(self.repo.list_all(), [])

    def test_non_array_file_rejected(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text('{"id": "x"}', encoding="utf-8")
        with self.assertRaises(ValueError):
            self.repo.list_all()


class TestMovieOperations(unittest.TestCase):
    """Image handling and not-found mapping in movie_catalog.services.movies."""

    def setUp(self) -> None:
        self.repo = JsonMovieRepository(Path(tempfile.mkdtemp()) / "movies.json")
        self.storage = MagicMock(spec=FileStorage)

    def test_create_without_image_uses_default(self) -> None:
        movie = movie_service.create_movie(self.repo, _form(), self.storage)
        self.assertEqual(movie.image, DEFAULT_IMAGE)
        self.storage.save.assert_not_called()

    def test_update_with_image_releases_old_one(self) -> None:
        self.storage.save.return_value = "old.png"
        movie = movie_service.create_movie(self.repo, _form(), self.storage, FakeUpload("a.png"))
        self.storage.save.return_value = "new.png"
        updated = movie_service.update_movie(
            self.repo, movie.id, _form(), self.storage, FakeUpload("b.png")
        )
        self.assertEqual(updated.image, "new.png")
        self.storage.delete.assert_called_once_with("old.png")

    def test_update_without_image_keeps_it(self) -> None:
        self.storage.save.return_value = "old.png"
        movie = movie_service.create_movie(self.repo, _form(), self.storage, FakeUpload("a.png"))
        updated = movie_service.update_movie(self.repo, movie.id, _form(year=1980), self.storage)
        self.assertEqual(updated.image, "old.png")
        self.storage.delete.assert_not_called()

    def test_missing_movie(self) -> None:
        with self.assertRaises(NotFoundError):
            movie_service.get_movie(self.repo, "missing")
        with self.assertRaises(NotFoundError):
            movie_service.update_movie(self.repo, "missing", _form(), self.storage, FakeUpload("a.png"))
        with self.assertRaises(NotFoundError):
            movie_service.delete_movie(self.repo, "missing", self.storage)
        self.storage.save.assert_not_called()
        self.storage.delete.assert_not_called()

    def test_delete_releases_image(self) -> None:
        self.storage.save.return_value = "poster.png"
        movie = movie_service.create_movie(self.repo, _form(), self.storage, FakeUpload("a.png"))
        movie_service.delete_movie(self.repo, movie.id, self.storage)
        self.storage.delete.assert_called_once_with("poster.png")


if __name__ == "__main__":
    unittest.main()
