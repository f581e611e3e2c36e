"""
Error kinds shared by all NuCampsite modules.

Every error carries the HTTP status the API layer answers with, so modules
can raise without knowing anything about HTTP and the API layer can render
without knowing anything about the module that failed.
"""

from typing import Optional


class NucampsiteError(Exception):
    """Base class for all service errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {"error": self.message, "status": self.status_code}


# Authentication and authorization


class AuthError(NucampsiteError):
    """Base class for authentication and authorization failures."""

    status_code = 401
    default_message = "Unauthorized"


class UserNotFound(AuthError):
    default_message = "Password or username is incorrect"


class BadCredentials(AuthError):
    default_message = "Password or username is incorrect"


class UsernameTaken(AuthError):
    # Signup failures are reported as server errors
    status_code = 500
    default_message = "A user with the given username is already registered"


class InvalidSignature(AuthError):
    default_message = "Invalid token"


class Expired(AuthError):
    default_message = "Token has expired"


class ProviderError(AuthError):
    status_code = 500
    default_message = "Identity provider exchange failed"


class Unauthenticated(AuthError):
    default_message = "Unauthorized"


class Forbidden(AuthError):
    status_code = 403
    default_message = "You are not authorized to perform this operation!"


class NotLoggedIn(AuthError):
    default_message = "You are not logged in!"


# Storage


class StorageError(NucampsiteError):
    """Wraps any failure of the underlying document store."""

    status_code = 500
    default_message = "Database operation failed"


class NotFound(NucampsiteError):
    status_code = 404
    default_message = "Not found"


__all__ = [
    "NucampsiteError",
    "AuthError",
    "UserNotFound",
    "BadCredentials",
    "UsernameTaken",
    "InvalidSignature",
    "Expired",
    "ProviderError",
    "Unauthenticated",
    "Forbidden",
    "NotLoggedIn",
    "StorageError",
    "NotFound",
]
