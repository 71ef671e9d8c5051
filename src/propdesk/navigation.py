"""
View paths and navigation state.

The CLI has no browser location, so ``Navigator`` records which view is
active and where redirects sent us. Paths mirror the web frontend's routes.
"""

from propdesk.logger import get_logger

logger = get_logger(__name__)

HOME_PATH = "/"
LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
FORGOT_PASSWORD_PATH = "/auth/forgot-password"
RESET_PASSWORD_PATH = "/auth/reset-password"

PUBLIC_ROUTES = [
    "/",
    "/properties",
    "/auth/login",
    "/auth/register",
    "/auth/forgot-password",
    "/auth/reset-password",
    "/about",
    "/contact",
    "/health",
]

DASHBOARD_PATHS = {
    "admin": "/admin/dashboard",
    "owner": "/owner/dashboard",
    "tenant": "/tenant/dashboard",
}


def dashboard_path(user_type: str) -> str:
    """Landing view for a role. Unknown roles land on the tenant dashboard."""
    return DASHBOARD_PATHS.get(user_type, DASHBOARD_PATHS["tenant"])


def is_public_route(path: str) -> bool:
    """True for views that need no session."""
    if path == HOME_PATH:
        return True
    return any(
        path == route or path.startswith(route + "/")
        for route in PUBLIC_ROUTES
        if route != HOME_PATH
    )


class Navigator:
    """Tracks the current view path and every redirect made."""

    def __init__(self, current_path: str = HOME_PATH):
        self.current_path = current_path
        self.history: list[str] = [current_path]

    @property
    def on_login_view(self) -> bool:
        return self.current_path == LOGIN_PATH

    def push(self, path: str) -> None:
        if path == self.current_path:
            return
        logger.debug(f"Navigating {self.current_path} -> {path}")
        self.current_path = path
        self.history.append(path)
