"""
Authentication integration tests.

Verifies:
- Registration returns a usable session
- Login with good and bad credentials
- Protected routes reject missing or unknown tokens
"""
from fastapi.testclient import TestClient


class TestRegistration:

    def test_register_returns_session(self, client: TestClient):
        response = client.post("/users", json={"username": "alice", "password": "password123"})

        assert response.status_code == 200
        session = response.json()
        assert set(session) == {"id", "userId", "token", "createdAt"}
        assert session["token"]

    def test_registered_user_has_hashed_password(self, client: TestClient, test_user: dict, auth_headers: dict):
        response = client.get(f"/users/{test_user['id']}", headers=auth_headers)

        assert response.status_code == 200
        user = response.json()
        assert user["username"] == test_user["username"]
        assert user["password"] != test_user["password"]

    def test_register_invalid_payload_lists_all_fields(self, client: TestClient):
        response = client.post("/users", json={"username": "al", "password": "short"})

        assert response.status_code == 422
        assert set(response.json()["errors"]) == {"username", "password"}

    def test_register_duplicate_username(self, client: TestClient, test_user: dict):
        response = client.post(
            "/users",
            json={"username": test_user["username"], "password": "anotherpass1"}
        )

        assert response.status_code == 422
        assert response.json() == {"errors": {"username": ["Username already taken"]}}


class TestLogin:

    def test_login_with_valid_credentials(self, client: TestClient, test_user: dict):
        response = client.post(
            "/auth/login",
            json={"username": test_user["username"], "password": test_user["password"]}
        )

        assert response.status_code == 200
        session = response.json()
        assert session["userId"] == test_user["id"]
        assert session["token"] != test_user["token"]

    def test_login_with_invalid_password(self, client: TestClient, test_user: dict):
        response = client.post(
            "/auth/login",
            json={"username": test_user["username"], "password": "wrongpassword"}
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid username or password"}

    def test_login_with_nonexistent_user(self, client: TestClient):
        response = client.post("/auth/login", json={"username": "nobody", "password": "password123"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid username or password"}


class TestProtectedRoutes:

    def test_missing_token(self, client: TestClient):
        for method, path in [
            ("GET", "/posts"),
            ("POST", "/posts"),
            ("GET", "/posts/1"),
            ("PUT", "/posts/1"),
            ("DELETE", "/posts/1"),
            ("GET", "/users/1"),
            ("PUT", "/users/1"),
            ("DELETE", "/users/1"),
        ]:
            response = client.request(method, path)
            assert response.status_code == 401, f"{method} {path}"
            assert response.json() == {"message": "Unauthorized"}

    def test_unknown_token(self, client: TestClient):
        response = client.get("/posts", headers={"Authorization": "not-a-real-token"})

        assert response.status_code == 401

    def test_bearer_prefix_accepted(self, client: TestClient, test_user: dict):
        response = client.get("/posts", headers={"Authorization": f"Bearer {test_user['token']}"})

        assert response.status_code == 200

    def test_health_is_public(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert "X-Request-ID" in response.headers
