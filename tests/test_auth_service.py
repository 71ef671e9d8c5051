"""
Unit tests for the login, logout and profile flows.
"""

import httpx
import pytest

from propdesk.auth import AuthService
from propdesk.exceptions import (
    AccountFormError,
    ApiConnectionError,
    ApiError,
    LoginError,
)

LOGIN = "/api/v1/auth/login"
LOGOUT = "/api/v1/auth/logout"
REGISTER_TENANT = "/api/v1/auth/register/tenant"
REGISTER_OWNER = "/api/v1/auth/register/owner"


def _login_ok(fake_api, user_type="tenant"):
    fake_api.add(
        "POST",
        LOGIN,
        body={
            "success": True,
            "data": {
                "token": "tok-1",
                "user": {"id": 7, "email": "a@example.com", "userType": user_type},
            },
        },
    )


class TestLogin:
    @pytest.mark.parametrize(
        "user_type,destination",
        [
            ("admin", "/admin/dashboard"),
            ("owner", "/owner/dashboard"),
            ("tenant", "/tenant/dashboard"),
        ],
    )
    def test_success_routes_by_role(self, make_ctx, fake_api, user_type, destination):
        _login_ok(fake_api, user_type)
        ctx = make_ctx()

        assert AuthService(ctx).login("a@example.com", "secret") == destination
        assert ctx.session.is_authenticated
        assert ctx.session.user.id == "7"
        assert ctx.session.token == "tok-1"
        assert ctx.navigator.current_path == destination
        assert fake_api.json_body("POST", LOGIN) == {
            "email": "a@example.com",
            "password": "secret",
        }

    def test_success_is_persisted(self, make_ctx, fake_api):
        _login_ok(fake_api)
        AuthService(make_ctx()).login("a@example.com", "secret")

        assert make_ctx().store.read().token == "tok-1"

    @pytest.mark.parametrize("email,password", [("", "x"), ("a@example.com", "")])
    def test_missing_credentials(self, make_ctx, fake_api, email, password):
        ctx = make_ctx()
        with pytest.raises(LoginError, match="both email and password"):
            AuthService(ctx).login(email, password)
        assert fake_api.requests == []

    def test_bad_credentials_leave_session_alone(self, make_ctx, fake_api):
        fake_api.add(
            "POST", LOGIN, status=401, body={"error": {"message": "Invalid credentials"}}
        )
        ctx = make_ctx()

        with pytest.raises(ApiError, match="Invalid credentials"):
            AuthService(ctx).login("a@example.com", "wrong")

        assert not ctx.session.is_authenticated
        assert ctx.navigator.current_path == "/auth/login"

    @pytest.mark.parametrize(
        "body,message",
        [
            ({"success": True}, "Invalid response"),
            ({"success": True, "data": {"token": "t"}}, "Missing token or user"),
            ({"success": True, "data": {"user": {"id": "1", "userType": "tenant"}}}, "Missing token or user"),
            (
                {"success": True, "data": {"token": "t", "user": {"id": "1", "userType": "guest"}}},
                "Invalid user data",
            ),
        ],
    )
    def test_malformed_response(self, make_ctx, fake_api, body, message):
        fake_api.add("POST", LOGIN, body=body)
        ctx = make_ctx()

        with pytest.raises(LoginError, match=message):
            AuthService(ctx).login("a@example.com", "secret")

        assert not ctx.session.is_authenticated
        assert ctx.store.read() is None

    def test_server_unreachable(self, make_ctx, fake_api):
        fake_api.add("POST", LOGIN, body=httpx.ConnectError("refused"))
        ctx = make_ctx()

        with pytest.raises(ApiConnectionError):
            AuthService(ctx).login("a@example.com", "secret")
        assert not ctx.session.is_authenticated


class TestLogout:
    def _signed_in(self, make_ctx):
        ctx = make_ctx("/tenant/dashboard")
        ctx.session.set_auth({"id": "u1", "userType": "tenant"}, "abc")
        return ctx

    def test_calls_server_and_clears(self, make_ctx, fake_api):
        fake_api.add("POST", LOGOUT, body={"success": True})
        ctx = self._signed_in(make_ctx)

        AuthService(ctx).logout()

        assert fake_api.last("POST", LOGOUT).headers["Authorization"] == "Bearer abc"
        assert not ctx.session.is_authenticated
        assert ctx.store.read() is None
        assert ctx.navigator.current_path == "/"

    @pytest.mark.parametrize(
        "status,body",
        [(500, {"message": "boom"}), (200, httpx.ConnectTimeout("slow"))],
    )
    def test_local_logout_despite_remote_failure(self, make_ctx, fake_api, status, body):
        fake_api.add("POST", LOGOUT, status=status, body=body)
        ctx = self._signed_in(make_ctx)

        AuthService(ctx).logout()

        assert not ctx.session.is_authenticated
        assert ctx.store.read() is None

    def test_signed_out_skips_server(self, make_ctx, fake_api):
        ctx = make_ctx()
        AuthService(ctx).logout(redirect_to="/auth/login")
        assert fake_api.requests == []
        assert ctx.navigator.current_path == "/auth/login"


class TestProfile:
    def test_refresh_merges_server_user(self, make_ctx, fake_api):
        fake_api.add(
            "GET",
            "/api/v1/auth/me",
            body={"data": {"user": {"id": "u1", "userType": "tenant", "mobile": "+971"}}},
        )
        ctx = make_ctx("/profile")
        ctx.session.set_auth({"id": "u1", "userType": "tenant", "email": "t@x.com"}, "abc")

        user = AuthService(ctx).refresh_profile()

        assert user.mobile == "+971"
        assert user.email == "t@x.com"
        assert ctx.session.token == "abc"

    def test_update_mirrors_contact_fields(self, make_ctx, fake_api):
        fake_api.add("PUT", "/api/v1/auth/profile", body={"success": True})
        ctx = make_ctx("/profile")
        ctx.session.set_auth({"id": "u1", "userType": "tenant"}, "abc")

        user = AuthService(ctx).update_profile({"mobile": "+971", "fullName": "Jane"})

        assert user.mobile == "+971"
        assert "fullName" not in user.to_dict()
        assert fake_api.json_body("PUT", "/api/v1/auth/profile") == {
            "mobile": "+971",
            "fullName": "Jane",
        }

    def test_update_prefers_returned_user(self, make_ctx, fake_api):
        fake_api.add(
            "PUT",
            "/api/v1/auth/profile",
            body={"data": {"user": {"id": "u1", "userType": "tenant", "email": "srv@x.com"}}},
        )
        ctx = make_ctx("/profile")
        ctx.session.set_auth({"id": "u1", "userType": "tenant"}, "abc")

        assert AuthService(ctx).update_profile({"email": "mine@x.com"}).email == "srv@x.com"

    @pytest.mark.parametrize("user_type", ["superadmin", None])
    def test_refresh_rejects_unknown_role(self, make_ctx, fake_api, user_type):
        fake_api.add(
            "GET",
            "/api/v1/auth/me",
            body={"data": {"user": {"id": "u1", "userType": user_type}}},
        )
        ctx = make_ctx("/profile")
        ctx.session.set_auth({"id": "u1", "userType": "tenant"}, "abc")

        with pytest.raises(ApiError, match="Invalid user data from server"):
            AuthService(ctx).refresh_profile()

        assert ctx.session.user.user_type == "tenant"
        assert ctx.session.is_authenticated

    def test_update_rejects_unknown_role(self, make_ctx, fake_api):
        fake_api.add(
            "PUT",
            "/api/v1/auth/profile",
            body={"data": {"user": {"id": "u1", "userType": "superadmin"}}},
        )
        ctx = make_ctx("/profile")
        ctx.session.set_auth({"id": "u1", "userType": "tenant", "email": "t@x.com"}, "abc")

        with pytest.raises(ApiError, match="Invalid user data from server"):
            AuthService(ctx).update_profile({"email": "new@x.com"})

        assert ctx.session.user.email == "t@x.com"


TENANT_FORM = {
    "email": "new@example.com",
    "mobile": "+971500000000",
    "password": "secret123",
    "fullName": "Jane Doe",
    "nationality": "",
    "emiratesId": None,
}


class TestRegistration:
    def test_tenant_signed_in_when_token_and_user_returned(self, make_ctx, fake_api):
        fake_api.add(
            "POST",
            REGISTER_TENANT,
            status=201,
            body={
                "success": True,
                "data": {
                    "token": "tok-new",
                    "user": {"id": 11, "email": "new@example.com", "userType": "tenant"},
                },
            },
        )
        ctx = make_ctx()

        destination = AuthService(ctx).register_tenant(TENANT_FORM, "secret123")

        assert destination == "/tenant/profile"
        assert ctx.navigator.current_path == "/tenant/profile"
        assert ctx.session.is_authenticated
        assert ctx.session.token == "tok-new"
        assert ctx.store.read().user.id == "11"
        assert fake_api.json_body("POST", REGISTER_TENANT) == {
            "email": "new@example.com",
            "mobile": "+971500000000",
            "password": "secret123",
            "fullName": "Jane Doe",
        }

    @pytest.mark.parametrize(
        "data",
        [
            {"user": {"id": "11", "userType": "tenant"}},
            {"token": "tok-new"},
            {"token": "tok-new", "user": {"id": "11", "userType": "guest"}},
            None,
        ],
    )
    def test_tenant_sent_to_login_otherwise(self, make_ctx, fake_api, data):
        fake_api.add("POST", REGISTER_TENANT, body={"success": True, "data": data})
        ctx = make_ctx()

        destination = AuthService(ctx).register_tenant(TENANT_FORM)

        assert destination == "/auth/login"
        assert ctx.navigator.current_path == "/auth/login"
        assert not ctx.session.is_authenticated
        assert ctx.store.read() is None

    def test_password_mismatch_sends_nothing(self, make_ctx, fake_api):
        ctx = make_ctx()

        with pytest.raises(AccountFormError, match="Passwords do not match"):
            AuthService(ctx).register_tenant(TENANT_FORM, "different")

        assert fake_api.requests == []
        assert ctx.navigator.current_path == "/auth/register/tenant"

    def test_server_error_leaves_session_alone(self, make_ctx, fake_api):
        fake_api.add(
            "POST",
            REGISTER_TENANT,
            status=409,
            body={"error": {"message": "Email already registered"}},
        )
        ctx = make_ctx()

        with pytest.raises(ApiError, match="Email already registered"):
            AuthService(ctx).register_tenant(TENANT_FORM)

        assert not ctx.session.is_authenticated

    def test_owner_goes_to_login_even_with_token(self, make_ctx, fake_api):
        fake_api.add(
            "POST",
            REGISTER_OWNER,
            body={
                "success": True,
                "data": {"token": "t", "user": {"id": "o1", "userType": "owner"}},
            },
        )
        ctx = make_ctx()
        form = {
            "email": "owner@example.com",
            "mobile": "+971",
            "password": "secret123",
            "firstName": "Sam",
            "lastName": "Lee",
            "ownerType": "individual",
            "companyName": "",
        }

        assert AuthService(ctx).register_owner(form, "secret123") == "/auth/login"

        assert not ctx.session.is_authenticated
        assert ctx.navigator.history[-2:] == ["/auth/register/owner", "/auth/login"]
        assert "companyName" not in fake_api.json_body("POST", REGISTER_OWNER)


class TestPasswordRecovery:
    def test_forgot_password(self, make_ctx, fake_api):
        fake_api.add("POST", "/api/v1/auth/forgot-password", body={"success": True})
        ctx = make_ctx()

        AuthService(ctx).forgot_password("  a@example.com ")

        assert fake_api.json_body("POST", "/api/v1/auth/forgot-password") == {
            "email": "a@example.com"
        }
        assert ctx.navigator.current_path == "/auth/forgot-password"

    def test_forgot_password_needs_email(self, make_ctx, fake_api):
        with pytest.raises(AccountFormError, match="enter your email"):
            AuthService(make_ctx()).forgot_password("   ")
        assert fake_api.requests == []

    def test_reset_password(self, make_ctx, fake_api):
        fake_api.add("POST", "/api/v1/auth/reset-password", body={"success": True})
        ctx = make_ctx()

        assert AuthService(ctx).reset_password("rt-1", "newpass99", "newpass99") == "/auth/login"

        assert fake_api.json_body("POST", "/api/v1/auth/reset-password") == {
            "token": "rt-1",
            "password": "newpass99",
            "confirmPassword": "newpass99",
        }
        assert ctx.navigator.current_path == "/auth/login"

    @pytest.mark.parametrize(
        "token,password,confirm,message",
        [
            ("", "newpass99", "newpass99", "Reset token is missing"),
            ("rt-1", "short", "short", "at least 8 characters"),
            ("rt-1", "newpass99", "newpass98", "Passwords do not match"),
        ],
    )
    def test_reset_password_validation(
        self, make_ctx, fake_api, token, password, confirm, message
    ):
        with pytest.raises(AccountFormError, match=message):
            AuthService(make_ctx()).reset_password(token, password, confirm)
        assert fake_api.requests == []

    def test_change_password(self, make_ctx, fake_api):
        fake_api.add("PUT", "/api/v1/auth/change-password", body={"success": True})
        ctx = make_ctx("/profile")
        ctx.session.set_auth({"id": "u1", "userType": "tenant"}, "abc")

        AuthService(ctx).change_password("oldpass99", "newpass99", "newpass99")

        assert fake_api.json_body("PUT", "/api/v1/auth/change-password") == {
            "currentPassword": "oldpass99",
            "newPassword": "newpass99",
        }

    @pytest.mark.parametrize(
        "current,new,confirm,message",
        [
            ("oldpass99", "short", "short", "at least 8 characters"),
            ("oldpass99", "newpass99", "newpass98", "Passwords do not match"),
            ("samepass9", "samepass9", "samepass9", "must be different"),
        ],
    )
    def test_change_password_validation(
        self, make_ctx, fake_api, current, new, confirm, message
    ):
        with pytest.raises(AccountFormError, match=message):
            AuthService(make_ctx()).change_password(current, new, confirm)
        assert fake_api.requests == []
