"""
Auth session management for propdesk.

- store: durable key-value slot holding the session triple
- state: the in-memory session state machine
- hydration: one-shot read of the store at start-up
- guard: role-aware gate for protected views
"""

from propdesk.session.guard import (
    GuardDecision,
    GuardResult,
    RouteGuard,
    guard_for_path,
    roles_for_path,
)
from propdesk.session.hydration import HydrationCoordinator
from propdesk.session.models import PersistedSession, User
from propdesk.session.state import AuthSession
from propdesk.session.store import FileStorage, MemoryStorage, PersistedStore

__all__ = [
    "AuthSession",
    "FileStorage",
    "GuardDecision",
    "GuardResult",
    "HydrationCoordinator",
    "MemoryStorage",
    "PersistedSession",
    "PersistedStore",
    "RouteGuard",
    "User",
    "guard_for_path",
    "roles_for_path",
]
