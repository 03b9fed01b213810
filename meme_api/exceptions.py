"""Custom exceptions for the Meme API.

Every exception carries an HTTP status code used by the error handlers in
main.py. The response body is always {"error": message}; details are only
logged.
"""


class MemeApiError(Exception):
    """Base exception for all Meme API errors."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MemeApiError):
    """Request data failed validation."""

    status_code = 400
    default_message = "Invalid request data"


class ResourceNotFound(MemeApiError):
    """Requested record does not exist."""

    status_code = 404
    default_message = "Resource not found"


class DuplicateUsername(MemeApiError):
    """A user with the requested username already exists."""

    status_code = 400
    default_message = "Username already taken"


class InvalidCredentials(MemeApiError):
    """Unknown username or wrong password.

    Both cases share one message so responses cannot be used to enumerate
    usernames.
    """

    status_code = 400
    default_message = "Invalid username or password"


class AuthenticationError(MemeApiError):
    """Base class for failures of the token gate."""

    status_code = 401
    default_message = "Authentication required"


class Unauthenticated(AuthenticationError):
    """No token was supplied."""

    status_code = 401
    default_message = "Access denied. No token provided."


class InvalidToken(AuthenticationError):
    """Token is malformed, has a bad signature, or has expired."""

    status_code = 400
    default_message = "Invalid token"


class DatabaseError(MemeApiError):
    """Database operation failed."""

    status_code = 500
