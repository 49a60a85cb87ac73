"""인증 API 테스트.

Auth API tests — demo login (find-or-create by email), token usage on the
``/users/me`` routes, logout, and bearer-token edge cases.
"""

import jwt
import pytest
from httpx import AsyncClient

from academy.config import settings
from academy.services.auth_service import auth_service
from academy.utils.exceptions import UnauthorizedError

URL = "/api/auth"


class TestLogin:
    """로그인 테스트."""

    async def test_login_creates_student(self, client: AsyncClient):
        res = await client.post(f"{URL}/login", json={"email": "newbie@test.com", "password": "anything"})
        assert res.status_code == 200
        data = res.json()
        assert data["user"]["email"] == "newbie@test.com"
        assert data["user"]["name"] == "newbie"
        assert data["user"]["role"] == "student"
        assert data["expiresIn"] == settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60

        payload = jwt.decode(data["token"], settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        assert payload["sub"] == data["user"]["id"]
        assert payload["type"] == "access"

    async def test_login_existing_user(self, client: AsyncClient, student):
        res = await client.post(f"{URL}/login", json={"email": "student@test.com", "password": "x"})
        assert res.status_code == 200
        assert res.json()["user"]["id"] == student.id

    async def test_login_twice_same_user(self, client: AsyncClient):
        body = {"email": "repeat@test.com", "password": "pw"}
        first = await client.post(f"{URL}/login", json=body)
        second = await client.post(f"{URL}/login", json=body)
        assert first.json()["user"]["id"] == second.json()["user"]["id"]

    async def test_token_works_on_me(self, client: AsyncClient, student):
        login = await client.post(f"{URL}/login", json={"email": "student@test.com", "password": "x"})
        token = login.json()["token"]
        res = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 200
        assert res.json()["id"] == student.id

    async def test_missing_password(self, client: AsyncClient):
        res = await client.post(f"{URL}/login", json={"email": "a@test.com"})
        assert res.status_code == 400
        assert res.json() == {"error": "Email and password are required"}

    async def test_empty_email(self, client: AsyncClient):
        res = await client.post(f"{URL}/login", json={"email": "", "password": "pw"})
        assert res.status_code == 400

    async def test_logout(self, client: AsyncClient):
        res = await client.post(f"{URL}/logout")
        assert res.status_code == 200
        assert res.json() == {"success": True, "message": "Logged out"}


class TestTokenResolution:
    """토큰 해석 테스트 — AuthService.user_id_from_*."""

    def test_no_token_is_demo_user(self):
        assert auth_service.user_id_from_token(None) == settings.DEMO_USER_ID
        assert auth_service.user_id_from_header(None) == settings.DEMO_USER_ID

    def test_wrong_token_type(self):
        token = jwt.encode(
            {"sub": "u1", "type": "refresh"}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
        )
        with pytest.raises(UnauthorizedError) as exc_info:
            auth_service.user_id_from_token(token)
        assert exc_info.value.detail == "Invalid token"

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "u1", "type": "access"}, "other-secret", algorithm="HS256")
        with pytest.raises(UnauthorizedError) as exc_info:
            auth_service.user_id_from_token(token)
        assert exc_info.value.status_code == 401

    def test_bad_scheme(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            auth_service.user_id_from_header("Basic dXNlcjpwYXNz")
        assert exc_info.value.detail == "Invalid authorization header"
