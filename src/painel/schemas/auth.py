from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.painel.schemas.user import UserRead


def safe_redirect_path(value: str | None) -> str:
    """Keep post-login redirects on this site: only absolute local paths are accepted."""
    if not value or not value.startswith("/") or value.startswith("//") or "\\" in value:
        return "/"
    return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=100)
    next: str | None = Field(
        default=None,
        max_length=500,
        description="Path the user originally requested; returned as redirect_to.",
    )

    @field_validator("next")
    @classmethod
    def validate_next(cls, v: str | None) -> str:
        return safe_redirect_path(v)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    redirect_to: str = "/"


class SessionRead(BaseModel):
    authenticated: bool = True
    user: UserRead
