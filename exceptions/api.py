"""
REST API related exceptions.
"""

from .base import RentalShopException

GENERIC_SERVER_MESSAGE = "Something went wrong"


class ApiException(RentalShopException):
    """Base exception for errors talking to the marketplace API."""
    pass


class ServerRejectionException(ApiException):
    """
    Raised when the API answers with 4xx/5xx or cannot be reached.

    status_code is None for transport failures (connection refused, timeout).
    """

    def __init__(self, status_code: int | None, message: str | None = None, path: str | None = None):
        super().__init__(
            message or GENERIC_SERVER_MESSAGE,
            details={'status_code': status_code, 'path': path}
        )
        self.status_code = status_code
        self.path = path
        # None when the response carried no usable "message"
        self.server_message = message

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class AuthRequiredException(ServerRejectionException):
    """Raised on 401 responses or when an action needs a logged-in user."""

    def __init__(self, message: str | None = None, path: str | None = None):
        super().__init__(401, message or "Authentication required", path)


class MalformedResponseException(ApiException):
    """Raised when a response body cannot be normalized."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Malformed response from {path}: {reason}",
            details={'path': path, 'reason': reason}
        )
        self.path = path
        self.reason = reason
