"""Tests for settings validation, tokens and password hashing."""

from datetime import timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.painel.core.config import Settings
from src.painel.core.exceptions import LoginRequiredError
from src.painel.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from src.painel.schemas.auth import LoginRequest, safe_redirect_path

pytestmark = pytest.mark.unit

SECRET = "s" * 32


def make_settings(**overrides) -> Settings:
    values = {"database_url": "sqlite+aiosqlite://", "jwt_secret_key": SECRET}
    values.update(overrides)
    return Settings(**values)


class TestSettings:
    def test_placeholder_secret_rejected(self):
        with pytest.raises(ValidationError, match="must be changed"):
            make_settings(jwt_secret_key="change-this-to-a-secure-random-string")

    def test_short_secret_rejected(self):
        with pytest.raises(ValidationError, match="at least 32"):
            make_settings(jwt_secret_key="short")

    def test_cors_wildcard_rejected(self):
        with pytest.raises(ValidationError, match="wildcard"):
            make_settings(cors_origins=["*"])

    def test_app_url_allow_list(self):
        assert make_settings(app_url="http://localhost:3000/").app_url == "http://localhost:3000"
        allowed = make_settings(
            allowed_app_url_domains=["painel.example.com"],
            app_url="https://sites.painel.example.com",
        )
        assert allowed.app_url == "https://sites.painel.example.com"
        with pytest.raises(ValidationError, match="not in allowed list"):
            make_settings(app_url="https://evil.example.org")

    def test_upload_retries_at_least_one(self):
        with pytest.raises(ValidationError, match="UPLOAD_MAX_RETRIES"):
            make_settings(upload_max_retries=0)
        assert make_settings(upload_max_size_mb=2).upload_max_size_bytes == 2 * 1024 * 1024


class TestTokens:
    def test_roundtrip(self):
        user_id = uuid4()
        token, expires_at = create_access_token(user_id)

        payload = decode_token(token)

        assert payload is not None
        assert payload["sub"] == str(user_id)
        assert payload["type"] == "access"
        assert int(expires_at.timestamp()) == payload["exp"]

    def test_expired_token(self):
        token, _ = create_access_token(uuid4(), expires_delta=timedelta(seconds=-5))
        assert decode_token(token) is None

    def test_garbage_token(self):
        assert decode_token("not-a-jwt") is None


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("testpassword123")
        assert hashed.startswith("$argon2id$")
        assert verify_password("testpassword123", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_invalid_hash(self):
        assert verify_password("anything", "not-a-hash") is False


class TestRedirects:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("/projetos?status=Recebido", "/projetos?status=Recebido"),
            (None, "/"),
            ("", "/"),
            ("https://evil.example.org", "/"),
            ("//evil.example.org", "/"),
            ("/\\evil.example.org", "/"),
        ],
    )
    def test_safe_redirect_path(self, value, expected):
        assert safe_redirect_path(value) == expected

    def test_login_request_sanitizes_next(self):
        body = LoginRequest(email="ana@example.com", password="x", next="//evil")
        assert body.next == "/"

    def test_login_url_carries_requested_path(self):
        exc = LoginRequiredError("/projetos/abc", "/login")
        assert exc.login_url == "/login?next=/projetos/abc"
