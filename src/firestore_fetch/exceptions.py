"""
Custom exceptions for firestore-fetch.

Everything raised on purpose by the package derives from FetchError, so the
CLI driver can report any failure with a single except clause.
"""
from typing import Any, Optional


class FetchError(Exception):
    """Base exception for all firestore-fetch failures."""
    pass


class ConfigError(FetchError):
    """Raised when the Firebase web config is missing or invalid."""
    pass


class AuthError(FetchError):
    """Raised when a sign-in request to the identity service fails."""
    pass


class CredentialsRequiredError(FetchError):
    """Raised when authenticated access is needed but no user/password was given."""

    def __init__(self, message: str = "User credentials are required for authenticated access."):
        super().__init__(message)


class QueryError(FetchError):
    """Raised when the structured query returns a non-success response."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 reason: Optional[str] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.payload = payload


class AuthorizationError(QueryError):
    """Raised when the query is refused in a way a password sign-in may fix."""
    code = None
    status = None


class UnauthenticatedError(AuthorizationError):
    """The service reported error code 401 for the collection."""
    code = 401
    status = "UNAUTHENTICATED"


class PermissionDeniedError(AuthorizationError):
    """The service reported error code 403 for the collection."""
    code = 403
    status = "PERMISSION_DENIED"
