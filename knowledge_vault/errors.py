"""Failure taxonomy for backend calls.

The backend client raises these; the request orchestrator decides how each
one is reported to the user.
"""


class VaultError(Exception):
    """Base class for every backend-call failure."""

    pass


class AuthorizationError(VaultError):
    """Backend rejected the session token (HTTP 401)."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Unauthorized")
        self.message = message


class BackendError(VaultError):
    """Backend answered with an error status.

    Attributes:
        status_code: HTTP status of the response.
        message: Human-readable message from the response body, if any.
    """

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(f"HTTP {status_code}: {message or 'no message'}")
        self.status_code = status_code
        self.message = message


class TransportError(VaultError):
    """Request never produced a response (connection refused, DNS, ...)."""

    pass


class RequestTimeout(TransportError):
    """Request did not complete within the configured timeout."""

    pass


class ResponseShapeError(VaultError):
    """Backend succeeded but the body lacks an expected field."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StorageError(VaultError):
    """The session could not be written to local storage."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
