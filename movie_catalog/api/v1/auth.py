"""Account routes (register, login, user CRUD) and the role gate dependencies."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from movie_catalog.core.database import get_db
from movie_catalog.core.dependencies import FileStorageDep
from movie_catalog.core.exceptions import ForbiddenError, UnauthorizedError
from movie_catalog.core.security import InvalidTokenError, TokenCodec, get_token_codec
from movie_catalog.models.user import UserRole
from movie_catalog.schemas.auth import TokenClaims
from movie_catalog.schemas.users import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    UserForm,
    UserOut,
)
from movie_catalog.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> TokenClaims:
    """Dependency: require a valid Bearer token and return its claims. Raises 401 otherwise."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    try:
        return codec.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Rejected bearer token: %s", e)
        raise UnauthorizedError("Invalid token") from e


def require_roles(*roles: UserRole) -> Callable[..., TokenClaims]:
    """
    Build a dependency that admits only tokens whose role is in ``roles``.

    Missing or invalid token -> 401; valid token with another role -> 403.
    The verified claims are passed to the handler.
    """
    allowed = frozenset(roles)

    def gate(
        claims: Annotated[TokenClaims, Depends(get_current_claims)],
    ) -> TokenClaims:
        if claims.role not in allowed:
            logger.warning(
                "Role %s denied for user id=%s; route allows %s",
                claims.role.value,
                claims.id,
                sorted(r.value for r in allowed),
            )
            raise ForbiddenError("Access denied")
        return claims

    return gate


AnyUser = Annotated[TokenClaims, Depends(require_roles(UserRole.USER, UserRole.ADMIN))]
AdminOnly = Annotated[TokenClaims, Depends(require_roles(UserRole.ADMIN))]


def user_form(
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    role: Annotated[str, Form()] = "",
) -> UserForm:
    """Validate register/update form fields together so every violation is reported."""
    try:
        return UserForm(name=name, email=email, password=password, role=role)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


def uploaded(file: UploadFile | None) -> UploadFile | None:
    """Treat an empty multipart file part as no file."""
    if file is None or not file.filename:
        return None
    return file


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    form: Annotated[UserForm, Depends(user_form)],
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    storage: FileStorageDep,
    avatar: Annotated[UploadFile | None, File()] = None,
) -> AuthResponse:
    """
    Create an account from multipart form fields (name, email, password, role)
    and an optional avatar image. Returns the user and a bearer token.
    """
    user, token = accounts.register_user(db, form, codec, storage, uploaded(avatar))
    return AuthResponse(user=UserOut.model_validate(user), access_token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns the user and a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    user, token = accounts.login_user(db, body, codec)
    return AuthResponse(user=UserOut.model_validate(user), access_token=token)


@router.get("", response_model=list[UserOut])
def list_users(
    _admin: AdminOnly,
    db: Annotated[Session, Depends(get_db)],
) -> list[UserOut]:
    """List all users (admin only)."""
    return [UserOut.model_validate(u) for u in accounts.list_users(db)]


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    _claims: AnyUser,
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    return UserOut.model_validate(accounts.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    _claims: AnyUser,
    form: Annotated[UserForm, Depends(user_form)],
    db: Annotated[Session, Depends(get_db)],
    storage: FileStorageDep,
    avatar: Annotated[UploadFile | None, File()] = None,
) -> UserOut:
    """
    Replace name, email, password, role and (optionally) avatar of a user.
    Any authenticated user may call this for any account.
    """
    user = accounts.update_user(db, user_id, form, storage, uploaded(avatar))
    return UserOut.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    _admin: AdminOnly,
    db: Annotated[Session, Depends(get_db)],
    storage: FileStorageDep,
) -> MessageResponse:
    """Delete a user (admin only) and release their avatar."""
    accounts.delete_user(db, user_id, storage)
    return MessageResponse(message="User deleted successfully.")
