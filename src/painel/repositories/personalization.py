"""Repositories for personalization submissions and model templates."""

from sqlmodel import col, select

from src.painel.models import ModelTemplate, SitePersonalization
from src.painel.repositories.base import BaseRepository


class PersonalizationRepository(BaseRepository[SitePersonalization]):
    model = SitePersonalization


class ModelTemplateRepository(BaseRepository[ModelTemplate]):
    model = ModelTemplate

    async def list_all(self) -> list[ModelTemplate]:
        """All templates ordered by name."""
        result = await self.session.execute(select(ModelTemplate).order_by(col(ModelTemplate.name)))
        return list(result.scalars().all())

    async def get_by_custom_url(self, custom_url: str) -> ModelTemplate | None:
        result = await self.session.execute(
            select(ModelTemplate).where(ModelTemplate.custom_url == custom_url)
        )
        return result.scalars().first()
