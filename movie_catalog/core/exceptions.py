"""Application errors raised by services and rendered by the API layer.

Every error carries the HTTP status it maps to; ``movie_catalog.main`` installs
a handler that turns them into ``{"error": message}`` responses.
"""


class CatalogError(Exception):
    """Base exception for all movie catalog errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(CatalogError):
    """Raised when an id or email has no matching record."""

    status_code = 404


class ConflictError(CatalogError):
    """Raised when registering an email that already has an account."""

    status_code = 400


class BadCredentialsError(CatalogError):
    """Raised when a login password does not match the stored hash."""

    status_code = 400


class UnauthorizedError(CatalogError):
    """Raised when the bearer token is missing or invalid."""

    status_code = 401


class ForbiddenError(CatalogError):
    """Raised when a valid token carries a role outside the route allow-list."""

    status_code = 403


class InvalidUploadError(CatalogError):
    """Raised when an uploaded file is rejected (type or size)."""

    status_code = 422
