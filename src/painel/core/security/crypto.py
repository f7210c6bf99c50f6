"""Cryptographic utilities - password hashing and JWT access tokens."""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import argon2
from jose import JWTError, jwt

from src.painel.core.config import get_settings


def _create_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


_password_hasher = _create_password_hasher()


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _password_hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        _password_hasher.verify(hashed, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


# Verified against when the email is unknown so both paths cost the same
DUMMY_PASSWORD_HASH = hash_password("painel-dummy-password")


def create_access_token(
    subject: str | UUID,
    expires_delta: timedelta | None = None,
) -> tuple[str, datetime]:
    """Create JWT access token. Returns (token, expiry)."""
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(UTC) + expires_delta

    to_encode = {
        "sub": str(subject),
        "exp": expire,
        "type": "access",
    }
    token: str = jwt.encode(  # type: ignore[assignment]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return token, expire


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
