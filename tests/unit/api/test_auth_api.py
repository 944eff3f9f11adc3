"""
API tests for authentication endpoints and the response envelope.
"""

import pytest

TEST_PASSWORD = "TestPassword123!"


@pytest.mark.asyncio
class TestRootEndpoints:
    async def test_root(self, async_client):
        response = await async_client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "OnboardHub API"}

    async def test_liveness(self, async_client):
        response = await async_client.get("/health")
        assert response.json() == {"status": "ok"}

    async def test_api_info(self, async_client):
        response = await async_client.get("/api/")
        assert response.status_code == 200
        assert response.json()["endpoints"]["sharing"] == "/api/sharing/"

    async def test_health_degraded_without_redis(self, async_client):
        response = await async_client.get("/api/health/")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["checks"]["database"]["connected"] is True

    async def test_component_health_endpoints(self, async_client):
        database = await async_client.get("/api/health/database")
        assert database.status_code == 200
        assert database.json()["status"] == "healthy"

        redis = await async_client.get("/api/health/redis")
        assert redis.status_code == 200
        assert redis.json() == {"connected": False, "status": "unavailable", "response_time_ms": None}


@pytest.mark.asyncio
class TestRegisterAndLogin:
    async def test_register_returns_created_envelope(self, async_client):
        response = await async_client.post(
            "/api/auth/register",
            json={
                "email": "alice@company.com",
                "password": "securepassword123",
                "confirm_password": "securepassword123",
                "name": "Alice",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["email"] == "alice@company.com"
        assert "password_hash" not in body["data"]

    async def test_register_duplicate_email(self, async_client, test_user):
        response = await async_client.post(
            "/api/auth/register",
            json={"email": test_user.email, "password": "securepassword123", "name": "Again"},
        )
        assert response.status_code == 409
        assert response.json() == {"success": False, "error": "Email already registered"}

    async def test_register_validation_envelope(self, async_client):
        response = await async_client.post(
            "/api/auth/register",
            json={"email": "bob@company.com", "password": "short", "name": "Bob"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("password:")

    async def test_register_password_mismatch(self, async_client):
        response = await async_client.post(
            "/api/auth/register",
            json={
                "email": "bob@company.com",
                "password": "securepassword123",
                "confirm_password": "different123",
                "name": "Bob",
            },
        )
        assert response.status_code == 400
        assert "Passwords do not match" in response.json()["error"]

    async def test_login_and_verify(self, async_client, test_user):
        login = await async_client.post(
            "/api/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD}
        )
        assert login.status_code == 200
        tokens = login.json()["data"]
        assert tokens["token_type"] == "bearer"

        verify = await async_client.get(
            "/api/auth/verify", headers={"Authorization": f"Bearer {tokens['access_token']}"}
        )
        assert verify.status_code == 200
        assert verify.json()["data"] == {
            "id": str(test_user.id),
            "email": test_user.email,
            "name": test_user.name,
        }

    async def test_login_bad_password(self, async_client, test_user):
        response = await async_client.post(
            "/api/auth/login", json={"email": test_user.email, "password": "wrong-password"}
        )
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}

    async def test_refresh(self, async_client, test_user):
        login = await async_client.post(
            "/api/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD}
        )
        refresh_token = login.json()["data"]["refresh_token"]

        response = await async_client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 200
        assert response.json()["data"]["refresh_token"] != refresh_token

        reused = await async_client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
        assert reused.status_code == 401


@pytest.mark.asyncio
class TestProfileEndpoints:
    async def test_me_requires_token(self, async_client):
        response = await async_client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Not authenticated"}
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_me_rejects_garbage_token(self, async_client):
        response = await async_client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token or expired token"

    async def test_me_and_update(self, async_client, test_user, auth_headers):
        me = await async_client.get("/api/auth/me", headers=auth_headers)
        assert me.json()["data"]["name"] == "Test User"

        updated = await async_client.put("/api/auth/me", json={"name": "Renamed"}, headers=auth_headers)
        assert updated.status_code == 200
        assert updated.json()["data"]["name"] == "Renamed"

    async def test_logout(self, async_client, auth_headers):
        response = await async_client.post("/api/auth/logout", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"

    async def test_delete_account(self, async_client, auth_headers):
        response = await async_client.delete("/api/auth/delete-account", headers=auth_headers)
        assert response.status_code == 200

        again = await async_client.get("/api/auth/me", headers=auth_headers)
        assert again.status_code == 404
