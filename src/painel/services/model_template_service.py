"""Model/template registry: CRUD, share links and public URL resolution."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.painel.core.logging import get_logger
from src.painel.models import ModelTemplate
from src.painel.models.base import touch
from src.painel.repositories import ModelTemplateRepository
from src.painel.schemas.model_template import (
    ModelTemplateCreate,
    ModelTemplateRead,
    ModelTemplateUpdate,
    ResolvedModel,
)
from src.painel.services.model_catalog import MODEL_CATALOG, find_catalog_model

logger = get_logger(__name__)

EMPTY_MODEL_NAME = "—"


class DuplicateCustomUrlError(ValueError):
    def __init__(self, custom_url: str) -> None:
        self.custom_url = custom_url
        super().__init__(f"Custom URL '{custom_url}' is already in use")


def _parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


class ModelTemplateService:
    """Templates live in the database; the compiled catalog covers older links."""

    def __init__(
        self,
        repo: ModelTemplateRepository,
        session: AsyncSession,
        app_url: str,
        default_model_id: str = "modelo1",
    ):
        self.repo = repo
        self.session = session
        self.app_url = app_url.rstrip("/")
        self.default_model_id = default_model_id

    def share_url(self, template: ModelTemplate) -> str:
        return f"{self.app_url}/formulario/{template.custom_url or template.id}"

    def to_read(self, template: ModelTemplate) -> ModelTemplateRead:
        return ModelTemplateRead(
            id=template.id,
            name=template.name,
            description=template.description,
            image_url=template.image_url,
            custom_url=template.custom_url,
            share_url=self.share_url(template),
            created_at=template.created_at,
            updated_at=template.updated_at,
        )

    async def list_all(self) -> list[ModelTemplate]:
        return await self.repo.list_all()

    async def get(self, template_id: UUID) -> ModelTemplate:
        template = await self.repo.get_by_id(template_id)
        if template is None:
            raise LookupError(f"Model template {template_id} not found")
        return template

    async def is_unique_custom_url(
        self, custom_url: str | None, exclude_id: UUID | None = None
    ) -> bool:
        """Linear scan over every template. Advisory only; the table has no constraint."""
        if not custom_url:
            return True
        templates = await self.repo.list_all()
        return not any(t.custom_url == custom_url and t.id != exclude_id for t in templates)

    async def create(self, data: ModelTemplateCreate) -> ModelTemplate:
        if not await self.is_unique_custom_url(data.custom_url):
            raise DuplicateCustomUrlError(data.custom_url or "")

        template = ModelTemplate(
            name=data.name,
            description=data.description,
            image_url=data.image_url,
            custom_url=data.custom_url,
        )
        self.repo.add(template)

        try:
            await self.session.commit()
            await self.session.refresh(template)
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateCustomUrlError(data.custom_url or "") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Model template created", template_id=str(template.id))
        return template

    async def update(self, template_id: UUID, data: ModelTemplateUpdate) -> ModelTemplate:
        template = await self.get(template_id)

        update_data = data.model_dump(exclude_unset=True)
        if "custom_url" in update_data and update_data["custom_url"] != template.custom_url:
            new_url = update_data["custom_url"]
            if not await self.is_unique_custom_url(new_url, exclude_id=template.id):
                raise DuplicateCustomUrlError(new_url)

        for field, value in update_data.items():
            if field == "name" and value is None:
                continue
            setattr(template, field, value)
        touch(template)

        try:
            await self.session.commit()
            await self.session.refresh(template)
        except Exception:
            await self.session.rollback()
            raise
        return template

    async def delete(self, template_id: UUID) -> None:
        try:
            removed = await self.repo.delete_by_id(template_id)
            if not removed:
                raise LookupError(f"Model template {template_id} not found")
            await self.session.commit()
        except LookupError:
            raise
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Model template deleted", template_id=str(template_id))

    async def resolve(self, segment: str | None) -> ResolvedModel:
        """Branding for /formulario/{segment}.

        Tries custom_url, then id, then the compiled catalog. When nothing
        matches the default model is returned with found=False and an error
        naming the segment; this never raises for an unknown segment.
        """
        param = (segment or "").strip()
        if not param:
            return self._default()

        template = await self.repo.get_by_custom_url(param)
        if template is not None:
            return self._from_template(template, source="custom_url")

        template_id = _parse_uuid(param)
        if template_id is not None:
            template = await self.repo.get_by_id(template_id)
            if template is not None:
                return self._from_template(template, source="id")

        catalog_model = find_catalog_model(param)
        if catalog_model is not None:
            return ResolvedModel(
                model_id=catalog_model.id,
                name=catalog_model.name,
                description=catalog_model.description,
                image_url=catalog_model.image_url,
                source="catalog",
            )

        logger.info("Model not found, using default", segment=param)
        return self._default(error=f"Modelo não encontrado: {param}")

    async def model_name(self, template_id: str | None) -> str:
        """Display name for a stored template reference; falls back to the raw value."""
        if not template_id:
            return EMPTY_MODEL_NAME

        parsed = _parse_uuid(template_id)
        if parsed is not None:
            template = await self.repo.get_by_id(parsed)
            if template is not None:
                return template.name

        template = await self.repo.get_by_custom_url(template_id)
        if template is not None:
            return template.name

        catalog_model = find_catalog_model(template_id)
        if catalog_model is not None:
            return catalog_model.name
        return template_id

    def _from_template(self, template: ModelTemplate, source: str) -> ResolvedModel:
        return ResolvedModel(
            model_id=str(template.id),
            name=template.name,
            description=template.description,
            image_url=template.image_url,
            source=source,  # type: ignore[arg-type]
        )

    def _default(self, error: str | None = None) -> ResolvedModel:
        default = find_catalog_model(self.default_model_id) or MODEL_CATALOG[0]
        return ResolvedModel(
            model_id=default.id,
            name=default.name,
            description=default.description,
            image_url=default.image_url,
            source="default",
            found=error is None,
            error=error,
        )
