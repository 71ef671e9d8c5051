"""Exception types raised by the propdesk client."""

from typing import Any, Optional


class PropdeskError(Exception):
    """Base class for all propdesk errors."""


class ApiError(PropdeskError):
    """The API answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class AuthenticationError(ApiError):
    """The API rejected our credentials (HTTP 401)."""


class ApiConnectionError(PropdeskError):
    """No response was received from the API."""

    def __init__(
        self,
        message: str = "Unable to connect to server. Please check if the backend is running.",
    ):
        super().__init__(message)
        self.message = message


class LoginError(PropdeskError):
    """Login input or login response was not usable."""


class AccountFormError(PropdeskError):
    """Registration or password-reset input was rejected before sending."""
