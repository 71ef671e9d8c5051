"""
Sign-in, sign-out, registration, password and profile flows on top of the
auth session.

Login never leaves a half-authenticated session: the state machine is only
touched once the response has both a token and a user. Logout is
local-first: the remote call is best effort and the local session is
cleared whatever happens to it.
"""

from typing import Any, Optional

from pydantic import ValidationError

from propdesk.context import AppContext
from propdesk.exceptions import AccountFormError, ApiError, LoginError
from propdesk.logger import get_logger
from propdesk.navigation import (
    FORGOT_PASSWORD_PATH,
    HOME_PATH,
    LOGIN_PATH,
    REGISTER_PATH,
    RESET_PASSWORD_PATH,
    dashboard_path,
)
from propdesk.session.models import User

logger = get_logger(__name__)

PROFILE_USER_FIELDS = ("email", "mobile")
MIN_PASSWORD_LENGTH = 8
TENANT_PROFILE_PATH = "/tenant/profile"


def _unwrap(response: Any) -> Optional[dict]:
    """Return the ``data`` member of an API envelope, if any."""
    if isinstance(response, dict) and isinstance(response.get("data"), dict):
        return response["data"]
    return None


class AuthService:
    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @property
    def session(self):
        return self.ctx.session

    def login(self, email: str, password: str) -> str:
        """
        Authenticate and open a session.

        Returns:
            The dashboard path for the signed-in user's role.

        Raises:
            LoginError: Missing input or an unusable response.
            ApiError / ApiConnectionError: The request itself failed.
        """
        self.ctx.navigator.push(LOGIN_PATH)

        if not email or not password:
            raise LoginError("Please enter both email and password")

        response = self.ctx.auth_api.login(email, password)

        data = _unwrap(response)
        if data is None:
            raise LoginError("Invalid response from server")

        token = data.get("token")
        user_data = data.get("user")
        if not token or not user_data:
            raise LoginError("Missing token or user data")

        try:
            user = User.model_validate(user_data)
        except ValidationError as e:
            logger.error(f"Login returned an unusable user record: {e}")
            raise LoginError("Invalid user data from server") from e

        self.session.set_auth(user, token)

        destination = dashboard_path(user.user_type)
        self.ctx.navigator.push(destination)
        return destination

    def logout(self, redirect_to: str = HOME_PATH) -> None:
        """Sign out locally, telling the server if we can."""
        if self.session.token:
            try:
                self.ctx.auth_api.logout()
            except Exception as e:
                logger.warning(f"Logout API error (ignored): {e}")

        self.session.logout()
        self.ctx.navigator.push(redirect_to)

    def register_tenant(
        self, data: dict[str, Any], confirm_password: Optional[str] = None
    ) -> str:
        """
        Create a tenant account.

        The server may sign the new tenant in straight away. When the
        response carries both a token and a usable user the session is
        opened and the tenant lands on their profile; otherwise they are
        sent to the login view.

        Returns:
            The path navigated to.
        """
        self.ctx.navigator.push(f"{REGISTER_PATH}/tenant")
        body = self._registration_body(data, confirm_password)

        result = _unwrap(self.ctx.auth_api.register_tenant(body)) or {}
        token = result.get("token")
        user_data = result.get("user")

        destination = LOGIN_PATH
        if token and user_data:
            try:
                user = User.model_validate(user_data)
            except ValidationError as e:
                logger.warning(f"Registration returned an unusable user record: {e}")
            else:
                self.session.set_auth(user, token)
                destination = TENANT_PROFILE_PATH

        self.ctx.navigator.push(destination)
        return destination

    def register_owner(
        self, data: dict[str, Any], confirm_password: Optional[str] = None
    ) -> str:
        """Submit an owner account for admin approval. Never signs in."""
        self.ctx.navigator.push(f"{REGISTER_PATH}/owner")
        body = self._registration_body(data, confirm_password)

        self.ctx.auth_api.register_owner(body)

        self.ctx.navigator.push(LOGIN_PATH)
        return LOGIN_PATH

    @staticmethod
    def _registration_body(
        data: dict[str, Any], confirm_password: Optional[str]
    ) -> dict[str, Any]:
        if confirm_password is not None and data.get("password") != confirm_password:
            raise AccountFormError("Passwords do not match")
        # Optional fields are left out rather than sent empty.
        return {k: v for k, v in data.items() if v not in (None, "")}

    def forgot_password(self, email: str) -> None:
        """Ask the server to mail a reset link."""
        self.ctx.navigator.push(FORGOT_PASSWORD_PATH)
        if not email or not email.strip():
            raise AccountFormError("Please enter your email address")
        self.ctx.auth_api.forgot_password(email.strip())

    def reset_password(
        self, token: str, password: str, confirm_password: str
    ) -> str:
        """Set a new password from a reset token, then go to the login view."""
        self.ctx.navigator.push(RESET_PASSWORD_PATH)
        if not token:
            raise AccountFormError("Reset token is missing or invalid.")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AccountFormError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if password != confirm_password:
            raise AccountFormError("Passwords do not match")

        self.ctx.auth_api.reset_password(token, password, confirm_password)

        self.ctx.navigator.push(LOGIN_PATH)
        return LOGIN_PATH

    def change_password(
        self, current_password: str, new_password: str, confirm_password: str
    ) -> None:
        if len(new_password or "") < MIN_PASSWORD_LENGTH:
            raise AccountFormError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if new_password != confirm_password:
            raise AccountFormError("Passwords do not match")
        if new_password == current_password:
            raise AccountFormError("New password must be different from current password")
        self.ctx.auth_api.change_password(current_password, new_password)

    def refresh_profile(self) -> Optional[User]:
        """Pull ``/auth/me`` and merge it into the session user."""
        data = _unwrap(self.ctx.auth_api.get_current_user()) or {}
        user_data = data.get("user", data)
        if user_data:
            self._merge_user(user_data)
        return self.session.user

    def update_profile(self, changes: dict[str, Any]) -> Optional[User]:
        """Save profile changes remotely, then mirror them into the session."""
        response = self.ctx.auth_api.update_profile(changes)

        data = _unwrap(response) or {}
        if isinstance(data.get("user"), dict):
            self._merge_user(data["user"])
        else:
            local = {k: v for k, v in changes.items() if k in PROFILE_USER_FIELDS}
            if local:
                self._merge_user(local)
        return self.session.user

    def _merge_user(self, fields: dict[str, Any]) -> None:
        try:
            self.session.update_user(fields)
        except ValidationError as e:
            logger.error(f"Server returned an unusable user record: {e}")
            raise ApiError("Invalid user data from server") from e
