"""Local storage for uploaded avatars and movie posters."""

import logging
import uuid
from pathlib import Path
from typing import BinaryIO, Protocol

from movie_catalog.core.exceptions import InvalidUploadError
from movie_catalog.models.base import DEFAULT_IMAGE

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".webp"})


class Upload(Protocol):
    """The parts of fastapi.UploadFile that storage needs."""

    filename: str | None
    file: BinaryIO


class FileStorage:
    """
    Saves uploads under random names in a single directory and deletes them on request.

    The shared DEFAULT_IMAGE placeholder is never written or removed.
    """

    def __init__(self, directory: str | Path, max_bytes: int) -> None:
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    def save(self, upload: Upload) -> str:
        """Write the upload to disk and return its stored file name."""
        filename = upload.filename or ""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_IMAGE_EXTENSIONS:
            raise InvalidUploadError(
                f"Uploaded file must be an image ({', '.join(sorted(ALLOWED_IMAGE_EXTENSIONS))})."
            )
        content = upload.file.read(self.max_bytes + 1)
        if len(content) > self.max_bytes:
            raise InvalidUploadError(
                f"File size must not exceed {self.max_bytes // 1024} KB."
            )
        name = f"{uuid.uuid4()}{ext}"
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / name).write_bytes(content)
        logger.info("Stored upload %s as %s (%d bytes)", filename, name, len(content))
        return name

    def delete(self, name: str | None) -> None:
        """
        Remove a stored file. The default placeholder and missing files are ignored,
        and names that resolve outside the upload directory are refused with a warning.
        """
        if not name or name == DEFAULT_IMAGE:
            return
        path = self._resolve(name)
        if path is None:
            logger.warning("Refusing to delete file outside upload directory: %r", name)
            return
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Stored file %s already missing; nothing to delete", name)
            return
        logger.info("Deleted stored file %s", name)

    def _resolve(self, name: str) -> Path | None:
        base = self.directory.resolve()
        path = (base / name).resolve()
        if path.parent != base:
            return None
        return path
