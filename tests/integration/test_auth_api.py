"""Integration tests for registration, login and bearer authentication."""

from datetime import timedelta
from uuid import uuid4

from backend.app.security.jwt import create_access_token


def _error_fields(response):
    return [e["field"] for e in response.json()["errors"]]


class TestRegisterAndLogin:
    def test_register(self, client):
        response = client.post(
            "/auth/register",
            json={
                "email": "New.User@Example.com",
                "password": "long-enough-password",
                "firstName": "Ada",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        user = body["data"]["user"]
        assert user["email"] == "new.user@example.com"
        assert user["firstName"] == "Ada"
        assert "passwordHash" not in user
        assert body["data"]["token"]

    def test_register_duplicate_email(self, client, test_user):
        response = client.post(
            "/auth/register",
            json={"email": "TEST@example.com", "password": "another-password"},
        )

        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Email already registered"}

    def test_register_short_password(self, client):
        response = client.post(
            "/auth/register", json={"email": "a@example.com", "password": "short"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation error"
        assert _error_fields(response) == ["password"]

    def test_register_invalid_email(self, client):
        response = client.post(
            "/auth/register", json={"email": "not-an-email", "password": "long-enough-pw"}
        )
        assert response.status_code == 400
        assert _error_fields(response) == ["email"]

    def test_login(self, client, test_user, test_password):
        response = client.post(
            "/auth/login", json={"email": test_user.email, "password": test_password}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == str(test_user.user_id)

        me = client.get(
            "/auth/me", headers={"Authorization": f"Bearer {data['token']}"}
        )
        assert me.status_code == 200
        assert me.json()["data"]["user"]["email"] == test_user.email

    def test_login_wrong_password(self, client, test_user):
        response = client.post(
            "/auth/login", json={"email": test_user.email, "password": "wrong-password"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_unknown_email(self, client):
        response = client.post(
            "/auth/login", json={"email": "nobody@example.com", "password": "whatever-pw"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_logout(self, client, auth_headers):
        response = client.post("/auth/logout", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Logged out successfully"}


class TestBearerAuthentication:
    def test_no_token(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token(self, client):
        response = client.get("/trips", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_expired_token(self, client, test_user):
        token = create_access_token(
            test_user.user_id, test_user.email, timedelta(seconds=-30)
        )
        response = client.get("/trips", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token expired"

    def test_token_for_deleted_user(self, client):
        token = create_access_token(uuid4(), "ghost@example.com")
        response = client.get("/trips", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_me_includes_safety_profile(self, client, auth_headers):
        client.post(
            "/users/safety-profile", json={"isSoloFemale": True}, headers=auth_headers
        )

        response = client.get("/auth/me", headers=auth_headers)

        profile = response.json()["data"]["user"]["safetyProfile"]
        assert profile["isSoloFemale"] is True
