"""Integration tests for login, sessions and dashboard accounts."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.painel.core.security import decode_token
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory

pytestmark = pytest.mark.integration


class TestLogin:
    async def test_login_returns_token_and_redirect(self, client: AsyncClient, test_user: dict):
        response = await client.post(
            "/api/v1/auth/login",
            json={
                "email": test_user["email"].upper(),
                "password": test_user["password"],
                "next": "/projetos?status=Recebido",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["redirect_to"] == "/projetos?status=Recebido"
        assert decode_token(body["access_token"])["sub"] == test_user["id"]

    async def test_external_next_falls_back_to_root(self, client: AsyncClient, test_user: dict):
        response = await client.post(
            "/api/v1/auth/login",
            json={
                "email": test_user["email"],
                "password": test_user["password"],
                "next": "https://evil.example.org/",
            },
        )
        assert response.json()["redirect_to"] == "/"

    async def test_wrong_password(self, client: AsyncClient, test_user: dict):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user["email"], "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"
        assert "request_id" in response.json()

    async def test_unknown_email(self, client: AsyncClient, engine):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": DEFAULT_TEST_PASSWORD},
        )
        assert response.status_code == 401

    async def test_inactive_user(self, client: AsyncClient, db_session: AsyncSession):
        user = UserFactory.inactive()
        db_session.add(user)
        await db_session.commit()

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": user.email, "password": DEFAULT_TEST_PASSWORD},
        )
        assert response.status_code == 401


class TestSession:
    async def test_valid_session(self, client: AsyncClient, auth_headers: dict, test_user: dict):
        response = await client.get("/api/v1/auth/session", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["authenticated"] is True
        assert body["user"]["email"] == test_user["email"]

    async def test_missing_token_points_to_login(self, client: AsyncClient, engine):
        response = await client.get("/api/v1/projects?status=Recebido")

        assert response.status_code == 401
        body = response.json()
        assert body["login_url"] == "/login?next=/api/v1/projects%3Fstatus%3DRecebido"
        assert body["request_id"]
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_garbage_token(self, client: AsyncClient, engine):
        response = await client.get(
            "/api/v1/auth/session", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401
        assert response.json()["login_url"] == "/login?next=/api/v1/auth/session"


class TestUsers:
    async def test_me(self, client: AsyncClient, auth_headers: dict, test_user: dict):
        response = await client.get("/api/v1/users/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == test_user["id"]
        assert "hashed_password" not in response.json()

    async def test_create_and_login_new_user(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/v1/users",
            headers=auth_headers,
            json={
                "email": "Novo@Example.com",
                "password": "senha-segura-1",
                "full_name": "Bruno Dias",
            },
        )

        assert response.status_code == 201
        assert response.json()["email"] == "novo@example.com"

        login = await client.post(
            "/api/v1/auth/login",
            json={"email": "novo@example.com", "password": "senha-segura-1"},
        )
        assert login.status_code == 200

    async def test_duplicate_email(self, client: AsyncClient, auth_headers: dict, test_user: dict):
        response = await client.post(
            "/api/v1/users",
            headers=auth_headers,
            json={
                "email": test_user["email"],
                "password": "senha-segura-1",
                "full_name": "Outra Pessoa",
            },
        )
        assert response.status_code == 409

    async def test_requires_login(self, client: AsyncClient, engine):
        response = await client.post(
            "/api/v1/users",
            json={"email": "x@example.com", "password": "senha-segura-1", "full_name": "X"},
        )
        assert response.status_code == 401
