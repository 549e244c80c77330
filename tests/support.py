"""Shared helpers for tests: isolated SQLite databases and an API client."""

import io
from collections.abc import Callable, Generator
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from movie_catalog.core.database import get_db
from movie_catalog.core.dependencies import get_file_storage
from movie_catalog.core.security import TokenCodec
from movie_catalog.main import app
from movie_catalog.models import Base
from movie_catalog.schemas.auth import TokenClaims
from movie_catalog.services.file_storage import FileStorage

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
STRONG_PASSWORD = "Str0ng!Pass"


def make_session_factory() -> sessionmaker:
    """A fresh in-memory database with all tables, shared by every session it creates."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_codec(**kwargs: object) -> TokenCodec:
    return TokenCodec(secret=TEST_SECRET, **kwargs)


def claims(role: str = "USER", user_id: str = "user-1") -> TokenClaims:
    return TokenClaims(id=user_id, email=f"{user_id}@example.com", name="Test", role=role)


class FakeUpload:
    """Minimal stand-in for fastapi.UploadFile."""

    def __init__(self, filename: str, content: bytes = b"\x89PNG\r\n\x1a\nfake") -> None:
        self.filename = filename
        self.file = io.BytesIO(content)


def make_client(
    session_factory: sessionmaker,
    upload_dir: str | Path,
    extra_overrides: dict[Callable, Callable] | None = None,
) -> TestClient:
    """TestClient over the real app with the database and upload dir swapped out."""

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: FileStorage(upload_dir, 1024 * 1024)
    for dep, override in (extra_overrides or {}).items():
        app.dependency_overrides[dep] = override
    return TestClient(app)


def reset_overrides() -> None:
    app.dependency_overrides.clear()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
