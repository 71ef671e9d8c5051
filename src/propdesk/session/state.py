"""
The auth session state machine.

One ``AuthSession`` lives in each ``AppContext``. It is either empty or
authenticated; ``has_hydrated`` is an orthogonal flag that tells consumers
whether the persisted state has been read back yet.
"""

from typing import Any, Callable, Optional

from propdesk.logger import get_logger
from propdesk.session.models import PersistedSession, User
from propdesk.session.store import PersistedStore

logger = get_logger(__name__)

Listener = Callable[["AuthSession"], None]


class AuthSession:
    """
    In-memory session with explicit transitions.

    ``is_authenticated`` is computed from ``user`` and ``token`` so the two
    can never disagree.
    """

    def __init__(
        self,
        store: Optional[PersistedStore] = None,
        persist_profile_updates: bool = False,
    ):
        self.store = store
        self.persist_profile_updates = persist_profile_updates
        self.user: Optional[User] = None
        self.token: Optional[str] = None
        self.has_hydrated = False
        # Set once set_auth/logout runs; hydration must not overwrite after that.
        self.explicitly_changed = False
        self._listeners: list[Listener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None

    @property
    def is_empty(self) -> bool:
        return self.user is None and self.token is None

    def snapshot(self) -> PersistedSession:
        return PersistedSession(
            user=self.user,
            token=self.token,
            is_authenticated=self.is_authenticated,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every transition. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"Session listener failed: {e}")

    def set_auth(self, user: User | dict[str, Any], token: str) -> None:
        """Enter the authenticated state and persist it."""
        if user is None:
            raise ValueError("set_auth requires a user")
        if not isinstance(token, str) or not token:
            raise ValueError("set_auth requires a non-empty token")
        if not isinstance(user, User):
            user = User.model_validate(user)

        self.user = user
        self.token = token
        self.explicitly_changed = True
        if self.store:
            self.store.write(self.snapshot())
        logger.info(f"Signed in as {user.id} ({user.user_type})")
        self._notify()

    def logout(self) -> None:
        """Return to the empty state. Always clears the persisted copy."""
        was_authenticated = self.is_authenticated
        self.user = None
        self.token = None
        self.explicitly_changed = True
        if self.store:
            self.store.clear()
        if was_authenticated:
            logger.info("Signed out")
        self._notify()

    def update_user(self, partial: Optional[dict[str, Any]] = None, **fields: Any) -> None:
        """
        Shallow-merge profile fields into the current user.

        Does nothing when signed out. The token is left alone, and the change
        is only written to storage when ``persist_profile_updates`` is on.
        """
        if self.user is None:
            return

        changes = {**(partial or {}), **fields}
        if "user_type" in changes:
            changes["userType"] = changes.pop("user_type")

        merged = {**self.user.to_dict(), **changes}
        self.user = User.model_validate(merged)

        if self.persist_profile_updates and self.store:
            self.store.write(self.snapshot())
        self._notify()

    def set_has_hydrated(self, value: bool) -> None:
        self.has_hydrated = value
        self._notify()

    def overlay(self, persisted: PersistedSession) -> bool:
        """
        Seed an untouched, empty session from storage.

        Returns True if the persisted values were applied.
        """
        if self.explicitly_changed or not self.is_empty:
            logger.debug("Skipping hydration overlay: session already changed")
            return False
        self.user = persisted.user
        self.token = persisted.token or None
        return True
