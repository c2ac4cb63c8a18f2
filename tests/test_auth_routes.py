# =============================================================================
# tests/test_auth_routes.py - Signup / Login / Logout / Check-auth Tests
# =============================================================================
# End-to-end tests through the FastAPI app with an in-memory store.
#
# Run with: pytest tests/test_auth_routes.py -v
# =============================================================================

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.context import AppContext
from app.main import create_app
from lib.utils import utc_now


# =============================================================================
# Signup
# =============================================================================

class TestSignup:
    """Tests for POST /signup."""

    def test_signup_succeeds(self, client, store, sample_user):
        response = client.post("/signup", json=sample_user)

        assert response.status_code == 201
        assert response.json() == {"message": "Signup successful"}
        assert len(store.rows("users")) == 1

    def test_signup_never_returns_password(self, client, sample_user):
        response = client.post("/signup", json=sample_user)

        body = response.text
        assert sample_user["password"] not in body
        assert "password" not in response.json()

    def test_password_is_stored_hashed(self, client, store, sample_user):
        client.post("/signup", json=sample_user)

        stored = store.rows("users")[0]
        assert stored["password_hash"] != sample_user["password"]
        assert stored["password_hash"].startswith("$2")
        assert "password" not in stored

    def test_duplicate_email_is_rejected(self, client, store, sample_user):
        assert client.post("/signup", json=sample_user).status_code == 201

        response = client.post("/signup", json={**sample_user, "name": "Other"})

        assert response.status_code == 400
        assert response.json()["message"] == "User already exists"
        assert len(store.rows("users")) == 1

    def test_duplicate_check_ignores_email_case(self, client, store, sample_user):
        client.post("/signup", json=sample_user)

        response = client.post(
            "/signup",
            json={**sample_user, "email": "  ADA@Example.com "},
        )

        assert response.status_code == 400
        assert len(store.rows("users")) == 1

    @pytest.mark.parametrize("missing", ["name", "email", "password"])
    def test_missing_field_is_rejected(self, client, store, sample_user, missing):
        payload = {k: v for k, v in sample_user.items() if k != missing}

        response = client.post("/signup", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid data"
        assert store.rows("users") == []

    def test_store_failure_returns_server_error(self, client, store, sample_user):
        store.fail_on = {"insert"}

        response = client.post("/signup", json=sample_user)

        assert response.status_code == 500
        assert response.json()["message"] == "Server error"


# =============================================================================
# Login
# =============================================================================

class TestLogin:
    """Tests for POST /login."""

    def test_login_returns_name_and_cookie(self, client, sample_user, cookie_name):
        client.post("/signup", json=sample_user)

        response = client.post(
            "/login",
            json={"email": sample_user["email"], "password": sample_user["password"]},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Login successful", "name": "Ada"}
        assert cookie_name in response.cookies

    def test_cookie_attributes_in_development(self, client, sample_user):
        client.post("/signup", json=sample_user)

        response = client.post(
            "/login",
            json={"email": sample_user["email"], "password": sample_user["password"]},
        )

        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "max-age=86400" in set_cookie
        assert "samesite=lax" in set_cookie
        assert "; secure" not in set_cookie

    def test_cookie_is_secure_in_production(self, test_settings, store, sample_user):
        prod_settings = test_settings.model_copy(update={"ENVIRONMENT": "production"})
        prod_client = TestClient(
            create_app(context=AppContext.build(prod_settings, store)),
            base_url="https://testserver",
        )
        prod_client.post("/signup", json=sample_user)

        response = prod_client.post(
            "/login",
            json={"email": sample_user["email"], "password": sample_user["password"]},
        )

        set_cookie = response.headers["set-cookie"].lower()
        assert "; secure" in set_cookie
        assert "samesite=none" in set_cookie

    def test_login_is_case_insensitive_on_email(self, client, sample_user):
        client.post("/signup", json=sample_user)

        response = client.post(
            "/login",
            json={"email": "ADA@EXAMPLE.COM", "password": sample_user["password"]},
        )

        assert response.status_code == 200

    def test_wrong_password_and_unknown_email_look_the_same(self, client, store, sample_user):
        client.post("/signup", json=sample_user)

        wrong_password = client.post(
            "/login",
            json={"email": sample_user["email"], "password": "nope"},
        )
        unknown_email = client.post(
            "/login",
            json={"email": "nobody@example.com", "password": sample_user["password"]},
        )

        assert wrong_password.status_code == unknown_email.status_code == 400
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["message"] == "Invalid email or password"
        assert store.rows("sessions") == []

    def test_session_holds_only_minimal_identity(self, logged_in_client, store):
        session = store.rows("sessions")[0]
        user = store.rows("users")[0]

        assert session["user_id"] == user["id"]
        assert session["user_name"] == "Ada"
        assert "password_hash" not in session
        assert user["password_hash"] not in session.values()
        assert "email" not in session

    def test_login_again_replaces_previous_session(self, logged_in_client, store, sample_user):
        logged_in_client.post(
            "/login",
            json={"email": sample_user["email"], "password": sample_user["password"]},
        )

        assert len(store.rows("sessions")) == 1

    def test_many_signups_can_each_log_in(self, client):
        users = [
            {"name": f"User {i}", "email": f"user{i}@example.com", "password": f"pw-{i}"}
            for i in range(3)
        ]
        for user in users:
            assert client.post("/signup", json=user).status_code == 201

        for user in users:
            response = client.post(
                "/login",
                json={"email": user["email"], "password": user["password"]},
            )
            assert response.status_code == 200
            assert response.json()["name"] == user["name"]


# =============================================================================
# Check-auth
# =============================================================================

class TestCheckAuth:
    """Tests for GET /check-auth."""

    def test_unauthenticated(self, client):
        response = client.get("/check-auth")

        assert response.status_code == 401
        assert response.json()["authenticated"] is False

    def test_authenticated(self, logged_in_client, store):
        response = logged_in_client.get("/check-auth")

        assert response.status_code == 200
        body = response.json()
        assert body["authenticated"] is True
        assert body["user"] == {"id": store.rows("users")[0]["id"], "name": "Ada"}

    def test_check_auth_has_no_side_effects(self, logged_in_client, store):
        before = [dict(row) for row in store.rows("sessions")]

        logged_in_client.get("/check-auth")
        logged_in_client.get("/check-auth")

        assert store.rows("sessions") == before

    def test_tampered_cookie_is_rejected(self, logged_in_client, cookie_name):
        token = logged_in_client.cookies.get(cookie_name)
        logged_in_client.cookies.clear()
        logged_in_client.cookies.set(cookie_name, token[:-2] + "xx")

        response = logged_in_client.get("/check-auth")

        assert response.status_code == 401

    def test_expired_session_is_unauthenticated(self, logged_in_client, store):
        store.rows("sessions")[0]["expires_at"] = (utc_now() - timedelta(seconds=1)).isoformat()
        store.fail_on = {"delete", "delete_before"}

        response = logged_in_client.get("/check-auth")

        assert response.status_code == 401
        assert response.json() == {"authenticated": False, "message": "Unauthorized"}
        assert len(store.rows("sessions")) == 1


# =============================================================================
# Logout
# =============================================================================

class TestLogout:
    """Tests for POST /logout."""

    def test_logout_destroys_session(self, logged_in_client, store):
        response = logged_in_client.post("/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logout successful"}
        assert store.rows("sessions") == []

    def test_logout_clears_cookie(self, logged_in_client, cookie_name):
        response = logged_in_client.post("/logout")

        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith(f"{cookie_name}=")
        assert "max-age=0" in set_cookie
        assert logged_in_client.get("/check-auth").status_code == 401

    def test_old_cookie_no_longer_grants_access(self, logged_in_client, cookie_name):
        token = logged_in_client.cookies.get(cookie_name)
        logged_in_client.post("/logout")

        # Replay the cookie a browser may have kept
        logged_in_client.cookies.clear()
        logged_in_client.cookies.set(cookie_name, token)

        assert logged_in_client.get("/incomes").status_code == 401
        assert logged_in_client.get("/check-auth").status_code == 401

    def test_logout_without_session_succeeds(self, client):
        response = client.post("/logout")

        assert response.status_code == 200

    def test_logout_with_garbage_cookie_succeeds(self, client, cookie_name):
        client.cookies.set(cookie_name, "not-a-session")

        response = client.post("/logout")

        assert response.status_code == 200

    def test_store_failure_reports_logout_error(self, logged_in_client, store):
        store.fail_on = {"delete"}

        response = logged_in_client.post("/logout")

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to log out"
        assert len(store.rows("sessions")) == 1
