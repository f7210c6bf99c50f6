from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.painel.core.security import hash_password
from src.painel.models import User
from src.painel.repositories import UserRepository
from src.painel.schemas.user import UserCreate


class DuplicateEmailError(ValueError):
    pass


class UserService:
    """Dashboard account management."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.user_repo.get_by_id(user_id)

    async def create(self, data: UserCreate) -> User:
        """Create an active account. Raises DuplicateEmailError when the email is taken."""
        if await self.user_repo.get_by_email(data.email) is not None:
            raise DuplicateEmailError(f"Email {data.email} is already registered")

        user = User(
            email=data.email,
            hashed_password=hash_password(data.password),
            full_name=data.full_name,
        )
        self.user_repo.add(user)

        try:
            await self.session.commit()
            await self.session.refresh(user)
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateEmailError(f"Email {data.email} is already registered") from e
        except Exception:
            await self.session.rollback()
            raise
        return user
