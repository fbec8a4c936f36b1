"""
Tests for the authentication endpoints.
"""

from datetime import timedelta

from conftest import PASSWORD, bearer, register
from jobtracker.core.security import create_access_token


def _assert_no_password(body):
    """Walk a JSON body and make sure no password-ish key shows up anywhere."""
    if isinstance(body, dict):
        for key, value in body.items():
            assert "password" not in key.lower()
            _assert_no_password(value)
    elif isinstance(body, list):
        for item in body:
            _assert_no_password(item)


class TestRegister:
    """Test account registration."""

    def test_register_returns_token_and_public_user(self, client):
        resp = register(client)

        assert resp.status_code == 201
        data = resp.json()
        assert data["token"]
        assert data["user"]["name"] == "Alice"
        assert data["user"]["email"] == "alice@example.com"
        assert data["user"]["lastName"] == "lastName"
        assert data["location"] == "my city"
        _assert_no_password(data)

    def test_register_lowercases_email(self, client):
        resp = register(client, email="Alice@Example.COM")

        assert resp.status_code == 201
        assert resp.json()["user"]["email"] == "alice@example.com"

    def test_register_twice_with_same_email_conflicts(self, client):
        assert register(client).status_code == 201

        resp = register(client, name="Alice Again")

        assert resp.status_code == 400
        assert resp.json() == {"msg": "Email already in use"}

    def test_register_missing_fields(self, client):
        resp = client.post("/api/v1/auth/register", json={"email": "a@b.com"})

        assert resp.status_code == 400
        assert resp.json()["msg"] == "Please provide all values"

    def test_register_blank_name_counts_as_missing(self, client):
        resp = register(client, name="   ")

        assert resp.status_code == 400
        assert resp.json()["msg"] == "Please provide all values"

    def test_register_invalid_email(self, client):
        resp = register(client, email="not-an-email")

        assert resp.status_code == 400
        assert "valid email" in resp.json()["msg"]

    def test_register_short_name(self, client):
        resp = register(client, name="Al")

        assert resp.status_code == 400
        assert "Name" in resp.json()["msg"]


class TestLogin:
    """Test credential checks."""

    def test_login_success(self, client):
        register(client)

        resp = client.post(
            "/api/v1/auth/login",
            json={"email": "alice@example.com", "password": PASSWORD},
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["token"]
        assert data["user"]["email"] == "alice@example.com"
        _assert_no_password(data)

    def test_login_wrong_password(self, client):
        register(client)

        resp = client.post(
            "/api/v1/auth/login",
            json={"email": "alice@example.com", "password": "wrong-password"},
        )

        assert resp.status_code == 401
        assert resp.json() == {"msg": "Invalid Credentials"}

    def test_login_unknown_email(self, client):
        resp = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": PASSWORD},
        )

        assert resp.status_code == 401
        assert resp.json() == {"msg": "Invalid Credentials"}

    def test_login_missing_password(self, client):
        resp = client.post("/api/v1/auth/login", json={"email": "alice@example.com"})

        assert resp.status_code == 400
        assert resp.json()["msg"] == "Please provide all values"


class TestBearerToken:
    """Test token resolution on protected routes."""

    def test_missing_token(self, client):
        resp = client.get("/api/v1/jobs")

        assert resp.status_code == 401
        assert resp.json() == {"msg": "Authentication invalid"}

    def test_garbage_token(self, client):
        resp = client.get("/api/v1/jobs", headers=bearer("not.a.token"))

        assert resp.status_code == 401

    def test_expired_token(self, client):
        user_id = register(client).json()["user"]["id"]
        token = create_access_token(user_id, expires_delta=timedelta(minutes=-1))

        resp = client.get("/api/v1/jobs", headers=bearer(token))

        assert resp.status_code == 401

    def test_token_for_missing_user(self, client):
        resp = client.get("/api/v1/jobs", headers=bearer(create_access_token(9999)))

        assert resp.status_code == 401


class TestUpdateUser:
    """Test profile updates."""

    def _payload(self, **overrides):
        payload = {
            "name": "Alicia",
            "lastName": "Smith",
            "email": "alicia@example.com",
            "location": "Berlin",
        }
        payload.update(overrides)
        return payload

    def test_update_user(self, client, auth_headers):
        resp = client.patch("/api/v1/auth/update-user", json=self._payload(), headers=auth_headers)

        assert resp.status_code == 200
        data = resp.json()
        assert data["user"]["name"] == "Alicia"
        assert data["user"]["lastName"] == "Smith"
        assert data["user"]["email"] == "alicia@example.com"
        assert data["location"] == "Berlin"
        assert data["token"]
        _assert_no_password(data)

        # The new token works and the new email logs in
        assert client.get("/api/v1/jobs", headers=bearer(data["token"])).status_code == 200
        login = client.post(
            "/api/v1/auth/login",
            json={"email": "alicia@example.com", "password": PASSWORD},
        )
        assert login.status_code == 200

    def test_update_user_keeps_own_email(self, client, auth_headers):
        resp = client.patch(
            "/api/v1/auth/update-user",
            json=self._payload(email="alice@example.com"),
            headers=auth_headers,
        )

        assert resp.status_code == 200

    def test_update_user_missing_field(self, client, auth_headers):
        payload = self._payload()
        del payload["location"]

        resp = client.patch("/api/v1/auth/update-user", json=payload, headers=auth_headers)

        assert resp.status_code == 400
        assert resp.json()["msg"] == "Please provide all values"

    def test_update_user_email_taken(self, client, auth_headers, other_headers):
        resp = client.patch(
            "/api/v1/auth/update-user",
            json=self._payload(email="mallory@example.com"),
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json() == {"msg": "Email already in use"}

    def test_update_user_requires_auth(self, client):
        resp = client.patch("/api/v1/auth/update-user", json=self._payload())

        assert resp.status_code == 401
