"""Application error taxonomy.

Every error carries the HTTP status it maps to at the request boundary; the
handlers in ``tasktracker.main`` turn them into ``{"detail": message}`` bodies.
"""


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    default_message: str = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class DuplicateEmailError(AppError):
    """Registration or profile change collides with an existing email."""

    status_code = 400
    default_message = "User already exists"


class UnauthenticatedError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    default_message = "Not authorized"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidTokenError(UnauthenticatedError):
    """Token is malformed, mis-signed, expired or has no subject."""

    default_message = "Not authorized, token failed"


class ForbiddenError(AppError):
    """Authenticated caller does not own the record.

    Reported as 401 to keep the status existing clients already handle.
    """

    status_code = 401
    default_message = "Not authorized"


class NotFoundError(AppError):
    """Referenced record does not exist."""

    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    """Unexpected store failure."""

    status_code = 500
