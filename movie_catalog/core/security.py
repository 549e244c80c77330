"""Password hashing and JWT issuing/verification for authentication."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from movie_catalog.core.config import Settings, get_settings
from movie_catalog.schemas.auth import TokenClaims

# bcrypt only reads the first 72 bytes of its input; longer passwords are refused outright.
BCRYPT_MAX_BYTES = 72


class InvalidTokenError(Exception):
    """Raised when a token is tampered, malformed, expired or carries bad claims."""


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash. Malformed hashes never match.

    Input longer than BCRYPT_MAX_BYTES never matches, since bcrypt ignores the tail.
    """
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


@dataclass(frozen=True)
class TokenCodec:
    """
    Signs and verifies identity tokens with a process-wide secret.

    Built once from settings (see get_token_codec) and injected where needed.
    expire_minutes=None issues tokens without an exp claim.
    """

    secret: str = field(repr=False)
    algorithm: str = "HS256"
    expire_minutes: int | None = None

    def issue(self, claims: TokenClaims) -> str:
        """Sign the identity claims (plus iat, and exp when configured)."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = claims.model_dump(mode="json")
        payload["iat"] = now
        if self.expire_minutes is not None:
            payload["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token; return the identity claims it was issued with.
        Raises InvalidTokenError on bad signature, malformed token, expiry or bad claims.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["iat"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e
        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError("Invalid token payload") from e


def build_token_codec(settings: Settings) -> TokenCodec:
    """Create the token codec from validated settings."""
    return TokenCodec(
        secret=settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )


@lru_cache
def get_token_codec() -> TokenCodec:
    """Dependency returning the process-wide token codec."""
    return build_token_codec(get_settings())
