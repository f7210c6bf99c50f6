"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete as sa_delete
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally (escape char is backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete_by_id(self, id: UUID) -> int:
        """Delete one record by primary key. Returns the number of rows removed."""
        result = await self.session.execute(
            sa_delete(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.rowcount  # type: ignore[attr-defined, no-any-return]

    async def count(self, *conditions: Any) -> int:
        """Count rows matching all conditions without loading them."""
        query = select(func.count()).select_from(self.model)
        for condition in conditions:
            query = query.where(condition)
        result = await self.session.execute(query)
        return int(result.scalar_one())
