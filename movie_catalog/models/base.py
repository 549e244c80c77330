"""SQLAlchemy declarative Base and shared model configuration."""

import uuid

from sqlalchemy.orm import DeclarativeBase

# Placeholder stored when no avatar or poster was uploaded; never deleted from disk.
DEFAULT_IMAGE = "default.png"


def new_id() -> str:
    """Opaque record id assigned by the store."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
