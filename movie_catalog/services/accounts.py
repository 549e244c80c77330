"""Account handlers: register, login, update and delete users."""

import logging

from sqlalchemy.orm import Session

from movie_catalog.core.exceptions import BadCredentialsError, ConflictError, NotFoundError
from movie_catalog.core.security import TokenCodec, hash_password, verify_password
from movie_catalog.models import User
from movie_catalog.models.base import DEFAULT_IMAGE
from movie_catalog.schemas.auth import TokenClaims
from movie_catalog.schemas.users import LoginRequest, UserForm
from movie_catalog.services.file_storage import FileStorage, Upload

logger = logging.getLogger(__name__)


def claims_for(user: User) -> TokenClaims:
    """Identity claims for a persisted user."""
    return TokenClaims(id=user.id, email=user.email, name=user.name, role=user.role)


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at, User.id).all()


def get_user(db: Session, user_id: str) -> User:
    """Return the user or raise NotFoundError."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user


def register_user(
    db: Session,
    form: UserForm,
    codec: TokenCodec,
    storage: FileStorage,
    avatar: Upload | None = None,
) -> tuple[User, str]:
    """
    Create an account and return it with a freshly issued token.

    The duplicate-email check is not atomic with the insert; concurrent
    registrations for the same email can both succeed.
    """
    if find_by_email(db, form.email) is not None:
        raise ConflictError("User already exists.")

    avatar_name = storage.save(avatar) if avatar is not None else DEFAULT_IMAGE
    user = User(
        name=form.name,
        email=form.email,
        password=hash_password(form.password),
        avatar=avatar_name,
        role=form.role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user id=%s role=%s", user.id, user.role)
    return user, codec.issue(claims_for(user))


def login_user(db: Session, body: LoginRequest, codec: TokenCodec) -> tuple[User, str]:
    """Check credentials and return the user with a new token."""
    user = find_by_email(db, body.email)
    if user is None:
        logger.warning("Login failed: no account for email")
        raise NotFoundError("User not found.")
    if not verify_password(body.password, user.password):
        logger.warning("Login failed: bad password for user id=%s", user.id)
        raise BadCredentialsError("Invalid password.")
    return user, codec.issue(claims_for(user))


def update_user(
    db: Session,
    user_id: str,
    form: UserForm,
    storage: FileStorage,
    avatar: Upload | None = None,
) -> User:
    """
    Replace every editable field of a user, re-hashing the password.

    The role is replaced as sent; callers are not checked against the target account.
    """
    user = get_user(db, user_id)

    if avatar is not None:
        new_avatar = storage.save(avatar)
        storage.delete(user.avatar)
        user.avatar = new_avatar

    user.name = form.name
    user.email = form.email
    user.password = hash_password(form.password)
    user.role = form.role.value
    db.commit()
    db.refresh(user)
    logger.info("Updated user id=%s role=%s", user.id, user.role)
    return user


def delete_user(db: Session, user_id: str, storage: FileStorage) -> None:
    """Remove the user and release a non-default avatar."""
    user = get_user(db, user_id)
    avatar = user.avatar
    db.delete(user)
    db.commit()
    storage.delete(avatar)
    logger.info("Deleted user id=%s", user_id)
