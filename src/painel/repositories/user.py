"""Repository for User entity."""

from sqlmodel import select

from src.painel.models import User
from src.painel.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address (stored lowercased)."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()
