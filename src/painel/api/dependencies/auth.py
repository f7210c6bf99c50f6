"""Authentication dependencies.

Every failure raises LoginRequiredError, which the exception handlers turn
into a 401 carrying the login URL with the requested path as `next`.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, Request

from src.painel.api.dependencies.services import AppSettings, UserServiceDep
from src.painel.core.exceptions import LoginRequiredError
from src.painel.core.logging import bind_user_context, get_logger
from src.painel.core.security import decode_token
from src.painel.models import User
from src.painel.services.auth_service import TokenType

logger = get_logger(__name__)


def _requested_path(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


async def get_current_user(
    request: Request,
    user_service: UserServiceDep,
    settings: AppSettings,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Validate the bearer token and return the active user it names."""

    def login_required(reason: str) -> LoginRequiredError:
        logger.debug("Authentication failed", reason=reason, path=request.url.path)
        return LoginRequiredError(_requested_path(request), settings.login_path)

    if not authorization or not authorization.startswith("Bearer "):
        raise login_required("missing bearer token")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise login_required("invalid or expired token")

    if payload.get("type") != TokenType.ACCESS:
        raise login_required("invalid token type")

    try:
        user_id = UUID(str(payload.get("sub", "")))
    except ValueError as e:
        raise login_required("invalid subject") from e

    user = await user_service.get_by_id(user_id)
    if user is None or not user.is_active:
        raise login_required("user not found or inactive")

    bind_user_context(user.id, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
