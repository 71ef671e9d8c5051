"""
Unit tests for the route guard and view-path helpers.
"""

import json

import pytest

from propdesk.navigation import Navigator, dashboard_path, is_public_route
from propdesk.session import (
    AuthSession,
    GuardDecision,
    HydrationCoordinator,
    MemoryStorage,
    PersistedStore,
    RouteGuard,
    guard_for_path,
    roles_for_path,
)


def _session(user=None, token=None, hydrated=True):
    session = AuthSession()
    if user:
        session.set_auth(user, token or "abc")
    session.set_has_hydrated(hydrated)
    return session


class TestRouteGuard:
    def test_loading_before_hydration_even_with_session(self):
        session = _session({"id": "u1", "userType": "tenant"}, hydrated=False)
        result = RouteGuard(session, ["tenant"]).evaluate()
        assert result.decision is GuardDecision.LOADING
        assert result.redirect_to is None

    def test_loading_before_hydration_without_session(self):
        result = RouteGuard(_session(hydrated=False)).evaluate()
        assert result.decision is GuardDecision.LOADING

    def test_redirects_to_login_after_hydration(self):
        result = RouteGuard(_session()).evaluate()
        assert result.decision is GuardDecision.REDIRECT_LOGIN
        assert result.redirect_to == "/auth/login"

    def test_wrong_role_redirects_home(self):
        session = _session({"id": "u1", "userType": "tenant"})
        result = RouteGuard(session, ["admin"]).evaluate()
        assert result.decision is GuardDecision.REDIRECT_UNAUTHORIZED
        assert result.redirect_to == "/"

    def test_matching_role_renders(self):
        session = _session({"id": "u1", "userType": "tenant"})
        result = RouteGuard(session, ["tenant", "owner"]).evaluate()
        assert result.allowed

    def test_no_roles_means_any_signed_in_user(self):
        session = _session({"id": "u1", "userType": "owner"})
        assert RouteGuard(session).evaluate().allowed

    def test_custom_destinations(self):
        guard = RouteGuard(_session(), login_path="/signin", unauthorized_path="/denied")
        assert guard.evaluate().redirect_to == "/signin"

    def test_apply_moves_navigator(self):
        navigator = Navigator("/admin/tenants")
        RouteGuard(_session(), ["admin"]).apply(navigator)
        assert navigator.current_path == "/auth/login"

    def test_apply_while_loading_stays_put(self):
        navigator = Navigator("/admin/tenants")
        RouteGuard(_session(hydrated=False), ["admin"]).apply(navigator)
        assert navigator.current_path == "/admin/tenants"
        assert navigator.history == ["/admin/tenants"]


class TestGuardAcrossHydration:
    @pytest.mark.asyncio
    async def test_fresh_process_empty_store(self):
        store = PersistedStore(MemoryStorage())
        session = AuthSession(store=store)
        navigator = Navigator("/tenant/dashboard")
        guard = guard_for_path(session, "/tenant/dashboard")

        assert guard.evaluate().decision is GuardDecision.LOADING

        guard.watch(navigator)
        await HydrationCoordinator(session, store).hydrate()

        assert navigator.current_path == "/auth/login"

    @pytest.mark.asyncio
    async def test_persisted_tenant_session(self):
        storage = MemoryStorage(
            {
                "auth-storage": json.dumps(
                    {
                        "user": {"id": "u1", "userType": "tenant"},
                        "token": "abc",
                        "isAuthenticated": True,
                    }
                )
            }
        )
        store = PersistedStore(storage)
        session = AuthSession(store=store)
        await HydrationCoordinator(session, store).hydrate()

        assert session.is_authenticated
        assert RouteGuard(session, ["tenant"]).evaluate().allowed
        admin = RouteGuard(session, ["admin"]).evaluate()
        assert admin.decision is GuardDecision.REDIRECT_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_restored_session_is_never_sent_to_login(self):
        storage = MemoryStorage(
            {
                "auth-storage": json.dumps(
                    {"user": {"id": "a1", "userType": "admin"}, "token": "abc"}
                )
            }
        )
        store = PersistedStore(storage)
        session = AuthSession(store=store)
        navigator = Navigator("/admin/dashboard")
        guard = guard_for_path(session, "/admin/dashboard")
        guard.watch(navigator)

        await HydrationCoordinator(session, store).hydrate()

        assert navigator.history == ["/admin/dashboard"]

    def test_logout_triggers_redirect_for_watched_guard(self):
        session = _session({"id": "u1", "userType": "owner"})
        navigator = Navigator("/owner/dashboard")
        guard_for_path(session, "/owner/dashboard").watch(navigator)

        session.logout()

        assert navigator.current_path == "/auth/login"


class TestPaths:
    @pytest.mark.parametrize(
        "path,roles",
        [
            ("/admin/tenants", {"admin"}),
            ("/admin", {"admin"}),
            ("/owner/properties/12/edit", {"owner"}),
            ("/tenant/move-permits", {"tenant"}),
            ("/profile", set()),
            ("/chat", {"tenant", "owner"}),
            ("/chat/rooms", {"tenant", "owner"}),
            ("/administrator", set()),
        ],
    )
    def test_roles_for_path(self, path, roles):
        assert roles_for_path(path) == frozenset(roles)

    @pytest.mark.parametrize(
        "user_type,decision",
        [
            ("tenant", GuardDecision.RENDER),
            ("owner", GuardDecision.RENDER),
            ("admin", GuardDecision.REDIRECT_UNAUTHORIZED),
        ],
    )
    def test_chat_is_for_tenants_and_owners(self, user_type, decision):
        session = _session({"id": "u1", "userType": user_type})
        assert guard_for_path(session, "/chat").evaluate().decision is decision

    @pytest.mark.parametrize(
        "path,public",
        [
            ("/", True),
            ("/properties", True),
            ("/properties/42", True),
            ("/auth/login", True),
            ("/auth/register/tenant", True),
            ("/auth/forgot-password", True),
            ("/auth/reset-password", True),
            ("/health", True),
            ("/tenant/dashboard", False),
            ("/profile", False),
            ("/chat", False),
        ],
    )
    def test_is_public_route(self, path, public):
        assert is_public_route(path) is public

    def test_dashboard_paths(self):
        assert dashboard_path("admin") == "/admin/dashboard"
        assert dashboard_path("owner") == "/owner/dashboard"
        assert dashboard_path("tenant") == "/tenant/dashboard"
        assert dashboard_path("unknown") == "/tenant/dashboard"

    def test_navigator_ignores_same_path(self):
        navigator = Navigator("/")
        navigator.push("/")
        navigator.push("/auth/login")
        assert navigator.history == ["/", "/auth/login"]
        assert navigator.on_login_view
