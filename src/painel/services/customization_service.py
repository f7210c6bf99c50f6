"""Customization requests attached to projects."""

from datetime import UTC
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.painel.core.logging import get_logger
from src.painel.models import EM_CUSTOMIZACAO, CustomizationStatus, ProjectCustomization
from src.painel.models.base import touch, utc_now
from src.painel.repositories import CustomizationRepository, ProjectRepository
from src.painel.schemas.customization import CustomizationCreate, CustomizationStatusUpdate
from src.painel.services.project_service import ProjectService

logger = get_logger(__name__)


class CustomizationService:
    """Create, list, re-status and delete customization requests.

    Creating a request also moves its project to "Em Customização". That
    move happens after the request is committed and its failure never undoes
    the request.
    """

    def __init__(
        self,
        customization_repo: CustomizationRepository,
        project_repo: ProjectRepository,
        project_service: ProjectService,
        session: AsyncSession,
    ):
        self.customization_repo = customization_repo
        self.project_repo = project_repo
        self.project_service = project_service
        self.session = session

    async def list_for_project(self, project_id: UUID) -> list[ProjectCustomization]:
        return await self.customization_repo.list_for_project(project_id)

    async def get(self, customization_id: UUID) -> ProjectCustomization:
        customization = await self.customization_repo.get_by_id(customization_id)
        if customization is None:
            raise LookupError(f"Customization {customization_id} not found")
        return customization

    async def create(self, project_id: UUID, data: CustomizationCreate) -> ProjectCustomization:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise LookupError(f"Project {project_id} not found")
        project_status = project.status

        customization = ProjectCustomization(
            project_id=project_id,
            description=data.description,
            priority=data.priority.value,
            notes=data.notes,
            status=CustomizationStatus.SOLICITADO.value,
            requested_at=utc_now(),
        )
        self.customization_repo.add(customization)

        try:
            await self.session.commit()
            await self.session.refresh(customization)
        except Exception:
            await self.session.rollback()
            raise
        # Detached, so a rollback in the status move below cannot expire it
        self.session.expunge(customization)

        logger.info(
            "Customization created",
            customization_id=str(customization.id),
            project_id=str(project_id),
        )

        if project_status != EM_CUSTOMIZACAO:
            try:
                await self.project_service.change_status(project_id, EM_CUSTOMIZACAO)
            except Exception as e:
                logger.error(
                    "Failed to move project to customization status",
                    project_id=str(project_id),
                    error=str(e),
                )

        return customization

    async def update_status(
        self,
        customization_id: UUID,
        data: CustomizationStatusUpdate,
    ) -> ProjectCustomization:
        customization = await self.get(customization_id)

        customization.status = data.status.value
        if data.completed_at is not None:
            completed_at = data.completed_at
            if completed_at.tzinfo is not None:
                completed_at = completed_at.astimezone(UTC).replace(tzinfo=None)
            customization.completed_at = completed_at
        elif data.status == CustomizationStatus.CONCLUIDO and customization.completed_at is None:
            customization.completed_at = utc_now()
        touch(customization)

        try:
            await self.session.commit()
            await self.session.refresh(customization)
        except Exception:
            await self.session.rollback()
            raise
        return customization

    async def delete(self, customization_id: UUID) -> None:
        try:
            removed = await self.customization_repo.delete_by_id(customization_id)
            if not removed:
                raise LookupError(f"Customization {customization_id} not found")
            await self.session.commit()
        except LookupError:
            raise
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Customization deleted", customization_id=str(customization_id))
