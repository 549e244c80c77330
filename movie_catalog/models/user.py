"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import Boolean, Column, DateTime, String, func
from sqlalchemy.orm import relationship, validates

from movie_catalog.models.base import DEFAULT_IMAGE, Base, new_id


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email is looked up before insert but not unique-constrained; two concurrent
    registrations with the same email can both succeed.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    avatar = Column(String(255), nullable=False, default=DEFAULT_IMAGE)
    role = Column(String(16), nullable=False, default=UserRole.USER.value)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    comments = relationship(
        "Comment", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    @validates("role")
    def validate_role(self, _key: str, value: str | UserRole) -> str:
        return UserRole(value).value
