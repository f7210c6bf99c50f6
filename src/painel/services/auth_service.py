"""Authentication service - password login issuing bearer tokens."""

from src.painel.core.logging import get_logger
from src.painel.core.security import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    verify_password,
)
from src.painel.repositories import UserRepository
from src.painel.schemas.auth import LoginResponse, safe_redirect_path

logger = get_logger(__name__)


class TokenType:
    """Token type constants."""

    ACCESS = "access"


class AuthService:
    """Validates credentials and issues access tokens.

    The dashboard has a single kind of user: anyone with an active account
    may use every protected route.
    """

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def authenticate(
        self,
        email: str,
        password: str,
        next_path: str | None = None,
    ) -> LoginResponse | None:
        """Return a token plus the post-login redirect, or None on bad credentials.

        Unknown emails still run a password verification so both failure
        paths take the same time.
        """
        user = await self.user_repo.get_by_email(email)

        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid:
            return None

        if not user.is_active:
            logger.info("Login refused for inactive user", user_id=str(user.id))
            return None

        access_token, expires_at = create_access_token(user.id)
        logger.info("User logged in", user_id=str(user.id))
        return LoginResponse(
            access_token=access_token,
            expires_at=expires_at,
            redirect_to=safe_redirect_path(next_path),
        )
