"""
Error taxonomy for the storefront API.

Every error raised on purpose by the application derives from
``StorefrontError`` and carries the HTTP status and a short machine-readable
code; ``storefront.main`` renders them as ``ErrorResponse`` bodies.
"""
from typing import Optional


class StorefrontError(Exception):
    """Base class for application errors."""
    status_code: int = 500
    error: str = "internal_error"
    message: str = "Internal Server Error"
    # Guard failures send browsers back to the login page
    redirect_to_login: bool = False

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message)


class InvalidIdError(StorefrontError):
    status_code = 400
    error = "invalid_id"
    message = "Invalid identifier format"


class NotFoundError(StorefrontError):
    status_code = 404
    error = "not_found"
    message = "Resource not found"


class ConflictError(StorefrontError):
    status_code = 409
    error = "conflict"
    message = "Resource already exists"


class InvalidCredentialsError(StorefrontError):
    status_code = 401
    error = "invalid_credentials"
    message = "Invalid username or password"


class NotAuthenticatedError(StorefrontError):
    status_code = 401
    error = "not_authenticated"
    message = "Authentication required"
    redirect_to_login = True


class PermissionDeniedError(StorefrontError):
    status_code = 403
    error = "forbidden"
    message = "You do not have access to this resource"


class AdminRequiredError(PermissionDeniedError):
    message = "Administrator role required"
    redirect_to_login = True


class OAuthUnavailableError(StorefrontError):
    status_code = 503
    error = "oauth_unavailable"
    message = "GitHub login is not configured"


class DatabaseUnavailableError(StorefrontError):
    status_code = 503
    error = "database_unavailable"
    message = "Database connection not available. Please check your MongoDB connection."
