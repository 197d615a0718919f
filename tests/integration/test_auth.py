import pytest
from datetime import timedelta
from httpx import AsyncClient
from fastapi import status
from category_api.core.security import create_access_token
from tests.conftest import TEST_USER

@pytest.mark.asyncio
class TestAuth:
    """Test authentication endpoints"""

    async def test_register_user(self, client: AsyncClient):
        """Test user registration"""
        response = await client.post("/api/v1/auth/register", json=TEST_USER)
        assert response.status_code == status.HTTP_201_CREATED

        data = response.json()
        assert data["token"]
        assert data["token_type"] == "bearer"
        assert data["user"]["email"] == TEST_USER["email"]
        assert data["user"]["name"] == TEST_USER["name"]
        assert "password" not in data["user"]
        assert "hashed_password" not in data["user"]

    async def test_register_duplicate_email(self, client: AsyncClient):
        await client.post("/api/v1/auth/register", json=TEST_USER)

        response = await client.post(
            "/api/v1/auth/register",
            json={**TEST_USER, "email": TEST_USER["email"].upper()},
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "User with this email already exists"

    @pytest.mark.parametrize("password", ["short1A", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere"])
    async def test_register_weak_password(self, client: AsyncClient, password: str):
        response = await client.post("/api/v1/auth/register", json={**TEST_USER, "password": password})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_register_invalid_email(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/register", json={**TEST_USER, "email": "not-an-email"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_login_success(self, client: AsyncClient):
        """Test successful login"""
        await client.post("/api/v1/auth/register", json=TEST_USER)

        login_data = {
            "email": TEST_USER["email"],
            "password": TEST_USER["password"]
        }

        response = await client.post("/api/v1/auth/login", json=login_data)
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["token"]
        assert data["user"]["email"] == TEST_USER["email"]

    async def test_login_wrong_password(self, client: AsyncClient):
        await client.post("/api/v1/auth/register", json=TEST_USER)

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": TEST_USER["email"], "password": "WrongPass123"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid email or password"

    async def test_login_invalid_credentials(self, client: AsyncClient):
        """Test login with invalid credentials"""
        login_data = {
            "email": "nonexistent@example.com",
            "password": "wrongpassword"
        }

        response = await client.post("/api/v1/auth/login", json=login_data)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid email or password"

    async def test_get_current_user(self, client: AsyncClient, auth_headers: dict):
        """Test getting current user info"""
        response = await client.get("/api/v1/auth/me", headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["email"] == TEST_USER["email"]
        assert data["is_active"] is True

    async def test_get_current_user_without_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Access denied. No token provided"

    async def test_get_current_user_with_invalid_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid or expired token"

    async def test_get_current_user_with_expired_token(self, client: AsyncClient):
        token = create_access_token({"sub": "1"}, expires_delta=timedelta(minutes=-5))

        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_get_current_user_for_unknown_user(self, client: AsyncClient):
        token = create_access_token({"sub": "999"})

        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "User not found or inactive"

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "ok"}
        assert response.headers["X-Request-Id"]
        assert float(response.headers["X-Process-Time"]) >= 0

    async def test_request_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-Id": "abc123"})
        assert response.headers["X-Request-Id"] == "abc123"
