"""API endpoint tests for health, registration, login and profile."""

from datetime import UTC, datetime, timedelta

from jose import jwt

from tasktracker.config import get_settings
from tasktracker.models.task import Task
from tasktracker.models.user import User
from tasktracker.services.auth import verify_access_token


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_only_documented_routes_are_served(client, auth_headers):
    """No banner at the root and no server-side logout; the token is dropped client-side."""
    assert client.get("/").status_code == 404
    assert client.post("/api/auth/logout", headers=auth_headers).status_code == 404


def test_register_user(client):
    """Test user registration returns a summary and a token."""
    response = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "secret123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Ann"
    assert data["email"] == "ann@x.com"
    assert data["id"]
    assert data["token"]
    assert "password" not in data
    assert "password_hash" not in data
    assert verify_access_token(data["token"]) == data["id"]


def test_register_stores_hash_not_password(client, db):
    """The stored credential is a bcrypt hash, never the plaintext."""
    client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "secret123"},
    )
    user = db.query(User).filter(User.email == "ann@x.com").one()
    assert user.password_hash != "secret123"
    assert user.password_hash.startswith("$2")


def test_register_duplicate_email(client, db, auth_headers):
    """Test registration with duplicate email fails and creates nothing."""
    response = client.post(
        "/api/auth/register",
        json={"name": "Imposter", "email": auth_headers.email, "password": "password123"},
    )
    assert response.status_code == 400
    assert "already exists" in response.json()["detail"]
    assert db.query(User).filter(User.email == auth_headers.email).count() == 1


def test_register_missing_name(client):
    """Missing required fields are a 400 with a readable message."""
    response = client.post(
        "/api/auth/register",
        json={"email": "ann@x.com", "password": "secret123"},
    )
    assert response.status_code == 400
    assert "name" in response.json()["detail"]


def test_register_invalid_email(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "not-an-email", "password": "secret123"},
    )
    assert response.status_code == 400


def test_login(client, auth_headers):
    """Test user login returns a token for the same user."""
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "secret123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == auth_headers.user_id
    assert data["name"] == "Ann"
    assert verify_access_token(data["token"]) == auth_headers.user_id


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_unknown_email(client):
    response = client.post(
        "/api/auth/login", json={"email": "nobody@x.com", "password": "secret123"}
    )
    assert response.status_code == 401


def test_login_email_is_case_sensitive(client, auth_headers):
    """Emails are matched exactly as stored."""
    response = client.post(
        "/api/auth/login", json={"email": "ANN@x.com", "password": "secret123"}
    )
    assert response.status_code == 401


def test_login_normalizes_email_domain(client, auth_headers):
    response = client.post(
        "/api/auth/login", json={"email": "ann@X.COM", "password": "secret123"}
    )
    assert response.status_code == 200
    assert response.json()["id"] == auth_headers.user_id


def test_login_malformed_email_is_invalid_credentials(client, auth_headers):
    """Any wrong credential is a 401, even one that is not an email address."""
    response = client.post("/api/auth/login", json={"email": "ann", "password": "secret123"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_long_password_is_invalid_credentials(client, auth_headers):
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "x" * 200}
    )
    assert response.status_code == 401


def test_login_requires_both_fields(client):
    response = client.post("/api/auth/login", json={"email": "ann@x.com"})
    assert response.status_code == 400


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == auth_headers.email
    assert "password_hash" not in response.json()


class TestAuthGateway:
    """Bearer token checks on protected routes."""

    def test_missing_header(self, client):
        response = client.get("/api/tasks")
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, no token"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_wrong_scheme(self, client, auth_headers):
        token = auth_headers["Authorization"].removeprefix("Bearer ")
        response = client.get("/api/tasks", headers={"Authorization": f"Basic {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, no token"

    def test_malformed_token(self, client):
        response = client.get("/api/tasks", headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, token failed"

    def test_tampered_token(self, client, auth_headers):
        forged = jwt.encode({"sub": auth_headers.user_id}, "some-other-secret", algorithm="HS256")
        response = client.get("/api/tasks", headers={"Authorization": f"Bearer {forged}"})
        assert response.status_code == 401

    def test_expired_token(self, client, auth_headers):
        settings = get_settings()
        expired = jwt.encode(
            {"sub": auth_headers.user_id, "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        response = client.get("/api/tasks", headers={"Authorization": f"Bearer {expired}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, token failed"

    def test_token_for_deleted_account(self, client, auth_headers):
        client.delete("/api/auth/profile", headers=auth_headers)

        response = client.get("/api/tasks", headers=auth_headers)
        assert response.status_code == 401
        assert response.json()["detail"] == "User not found"


class TestProfile:
    """Profile update and account deletion."""

    def test_update_name(self, client, auth_headers):
        response = client.put("/api/auth/profile", headers=auth_headers, json={"name": "Annie"})
        assert response.status_code == 200
        assert response.json()["name"] == "Annie"
        assert response.json()["email"] == auth_headers.email

    def test_blank_fields_keep_stored_values(self, client, auth_headers):
        response = client.put(
            "/api/auth/profile",
            headers=auth_headers,
            json={"name": "", "email": "", "password": ""},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Ann"
        assert response.json()["email"] == auth_headers.email

    def test_update_password(self, client, auth_headers):
        response = client.put(
            "/api/auth/profile", headers=auth_headers, json={"password": "newsecret456"}
        )
        assert response.status_code == 200

        old = client.post(
            "/api/auth/login", json={"email": auth_headers.email, "password": "secret123"}
        )
        new = client.post(
            "/api/auth/login", json={"email": auth_headers.email, "password": "newsecret456"}
        )
        assert old.status_code == 401
        assert new.status_code == 200

    def test_update_email(self, client, auth_headers):
        response = client.put(
            "/api/auth/profile", headers=auth_headers, json={"email": "ann@y.com"}
        )
        assert response.status_code == 200
        assert response.json()["email"] == "ann@y.com"

        login = client.post(
            "/api/auth/login", json={"email": "ann@y.com", "password": "secret123"}
        )
        assert login.status_code == 200

    def test_update_email_to_taken_address(self, client, auth_headers, other_auth_headers):
        response = client.put(
            "/api/auth/profile", headers=auth_headers, json={"email": other_auth_headers.email}
        )
        assert response.status_code == 400

    def test_update_requires_token(self, client):
        response = client.put("/api/auth/profile", json={"name": "Nobody"})
        assert response.status_code == 401

    def test_delete_account_cascades_to_own_tasks_only(
        self, client, db, auth_headers, other_auth_headers
    ):
        for title in ("One", "Two"):
            client.post("/api/tasks", headers=auth_headers, json={"title": title})
        client.post("/api/tasks", headers=other_auth_headers, json={"title": "Bob's"})

        response = client.delete("/api/auth/profile", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "User and all tasks deleted", "deleted_tasks": 2}

        assert db.query(User).filter(User.id == auth_headers.user_id).count() == 0
        assert db.query(Task).filter(Task.owner_id == auth_headers.user_id).count() == 0
        remaining = db.query(Task).filter(Task.owner_id == other_auth_headers.user_id).all()
        assert [t.title for t in remaining] == ["Bob's"]
