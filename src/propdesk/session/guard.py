"""
Route guard: decides whether a protected view may render.

The checks run in a fixed order. Nothing is decided before hydration, so
a restored session is never bounced to the login view on start-up.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from propdesk.logger import get_logger
from propdesk.navigation import HOME_PATH, LOGIN_PATH, Navigator
from propdesk.session.state import AuthSession

logger = get_logger(__name__)

ROLE_PREFIXES = {
    "/admin": "admin",
    "/owner": "owner",
    "/tenant": "tenant",
}

# Views shared by several roles.
SHARED_VIEW_ROLES = {
    "/chat": frozenset({"tenant", "owner"}),
}


class GuardDecision(str, Enum):
    LOADING = "loading"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_UNAUTHORIZED = "redirect_unauthorized"
    RENDER = "render"


@dataclass(frozen=True)
class GuardResult:
    decision: GuardDecision
    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.decision is GuardDecision.RENDER


class RouteGuard:
    """Gate for a view that needs a session and, optionally, a role."""

    def __init__(
        self,
        session: AuthSession,
        allowed_roles: Optional[Iterable[str]] = None,
        login_path: str = LOGIN_PATH,
        unauthorized_path: str = HOME_PATH,
    ):
        self.session = session
        self.allowed_roles = frozenset(allowed_roles) if allowed_roles else frozenset()
        self.login_path = login_path
        self.unauthorized_path = unauthorized_path

    def evaluate(self) -> GuardResult:
        session = self.session

        if not session.has_hydrated:
            return GuardResult(GuardDecision.LOADING)

        if not session.is_authenticated:
            return GuardResult(GuardDecision.REDIRECT_LOGIN, self.login_path)

        if self.allowed_roles and session.user.user_type not in self.allowed_roles:
            logger.debug(
                f"Role {session.user.user_type} not in {sorted(self.allowed_roles)}"
            )
            return GuardResult(
                GuardDecision.REDIRECT_UNAUTHORIZED, self.unauthorized_path
            )

        return GuardResult(GuardDecision.RENDER)

    def apply(self, navigator: Navigator) -> GuardResult:
        """Evaluate and perform any redirect on ``navigator``."""
        result = self.evaluate()
        if result.redirect_to:
            navigator.push(result.redirect_to)
        return result

    def watch(self, navigator: Navigator):
        """
        Re-apply the guard after every session transition.

        Returns the unsubscribe function.
        """
        return self.session.subscribe(lambda _session: self.apply(navigator))


def roles_for_path(path: str) -> frozenset[str]:
    """Roles allowed on a view path; empty means any signed-in user."""
    for prefix, roles in SHARED_VIEW_ROLES.items():
        if path == prefix or path.startswith(prefix + "/"):
            return roles
    for prefix, role in ROLE_PREFIXES.items():
        if path == prefix or path.startswith(prefix + "/"):
            return frozenset({role})
    return frozenset()


def guard_for_path(session: AuthSession, path: str) -> RouteGuard:
    return RouteGuard(session, allowed_roles=roles_for_path(path))
