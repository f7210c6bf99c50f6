"""Authentication endpoints."""

from fastapi import APIRouter, HTTPException, status
from starlette.requests import Request

from src.painel.api.dependencies import AuthServiceDep, CurrentUser
from src.painel.core.config import get_settings
from src.painel.core.rate_limit import limiter
from src.painel.schemas.auth import LoginRequest, LoginResponse, SessionRead
from src.painel.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


def _login_rate_limit() -> str:
    return get_settings().login_rate_limit


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description=(
        "Exchange email and password for a bearer token. `redirect_to` echoes the "
        "`next` path the user originally requested, or `/`."
    ),
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                        "expires_at": "2025-01-15T22:30:00Z",
                        "redirect_to": "/projetos",
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many login attempts"},
    },
)
@limiter.limit(_login_rate_limit)
async def login(
    request: Request, login_data: LoginRequest, service: AuthServiceDep
) -> LoginResponse:
    """Authenticate user and return an access token."""
    result = await service.authenticate(login_data.email, login_data.password, login_data.next)

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return result


@router.get(
    "/session",
    response_model=SessionRead,
    summary="Current session",
    description="Confirm the bearer token is valid and return its user.",
    responses={
        200: {"description": "Session is valid"},
        401: {"description": "Not authenticated; body carries login_url"},
    },
)
async def get_session(current_user: CurrentUser) -> SessionRead:
    return SessionRead(user=UserRead.model_validate(current_user))
