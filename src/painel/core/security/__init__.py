"""Security utilities.

Re-exports password hashing and token helpers for convenience.
"""

from src.painel.core.security.crypto import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

__all__ = [
    "DUMMY_PASSWORD_HASH",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
]
