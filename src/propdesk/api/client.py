"""
HTTP client for the property-management REST API.

Adds the session's bearer token to every request and turns a 401 into a
forced logout plus a redirect to the login view, unless the login view is
already showing.
"""

from typing import Any, Optional

import httpx

from propdesk.exceptions import ApiConnectionError, ApiError, AuthenticationError
from propdesk.logger import get_logger
from propdesk.navigation import LOGIN_PATH, Navigator
from propdesk.session.state import AuthSession

logger = get_logger(__name__)


def _error_message(response: httpx.Response) -> tuple[str, Any]:
    """Pull a human-readable message out of an error response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"]), payload
        if isinstance(error, str) and error:
            return error, payload
        if payload.get("message"):
            return str(payload["message"]), payload

    return f"Server error: {response.status_code}", payload


class ApiClient:
    """Thin wrapper over ``httpx.Client`` bound to one session."""

    def __init__(
        self,
        session: AuthSession,
        navigator: Navigator,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.session = session
        self.navigator = navigator
        self.base_url = base_url
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _auth_headers(self) -> dict[str, str]:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def _handle_unauthorized(self) -> None:
        if self.navigator.on_login_view:
            logger.debug("401 on the login view, not redirecting")
            return
        logger.warning("Session rejected by the API, signing out")
        self.session.logout()
        self.navigator.push(LOGIN_PATH)

    def request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Send a request and return the decoded JSON body.

        Raises:
            ApiConnectionError: No response came back.
            AuthenticationError: The API answered 401.
            ApiError: Any other non-2xx answer.
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}

        try:
            response = self._client.request(
                method,
                path,
                json=json,
                params=params or None,
                headers=self._auth_headers(),
            )
        except httpx.TransportError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiConnectionError() from e

        if response.status_code == 401:
            self._handle_unauthorized()

        if response.is_error:
            message, payload = _error_message(response)
            error_cls = AuthenticationError if response.status_code == 401 else ApiError
            logger.debug(f"{method} {path} -> {response.status_code}: {message}")
            raise error_cls(message, status_code=response.status_code, payload=payload)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"data": response.text}

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        return self.request("POST", path, json=data or {})

    def put(self, path: str, data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        return self.request("PUT", path, json=data or {})

    def patch(self, path: str, data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        return self.request("PATCH", path, json=data or {})

    def delete(self, path: str) -> dict[str, Any]:
        return self.request("DELETE", path)
