"""Dashboard account endpoints."""

from fastapi import APIRouter, HTTPException, status

from src.painel.api.dependencies import CurrentUser, UserServiceDep
from src.painel.schemas.user import UserCreate, UserRead
from src.painel.services.user_service import DuplicateEmailError

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=UserRead,
    responses={
        200: {"description": "Current user profile"},
        401: {"description": "Not authenticated"},
    },
)
async def get_current_user(current_user: CurrentUser) -> UserRead:
    """Get current authenticated user."""
    return UserRead.model_validate(current_user)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create another dashboard account. Any logged-in user may do this.",
    responses={
        201: {"description": "User created"},
        409: {"description": "Email already registered"},
    },
)
async def create_user(
    data: UserCreate,
    service: UserServiceDep,
    _user: CurrentUser,
) -> UserRead:
    try:
        user = await service.create(data)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return UserRead.model_validate(user)
