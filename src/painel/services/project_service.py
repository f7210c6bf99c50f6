"""Project CRUD, status transitions and dashboard statistics."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.painel.core.exceptions import StatusConflictError
from src.painel.core.logging import get_logger
from src.painel.core.realtime import ChangeEvent, ChangeEventType, ChangeFeed
from src.painel.models import ClientType, Project, ProjectStatus
from src.painel.models.base import touch
from src.painel.repositories import CustomizationRepository, ProjectRepository
from src.painel.schemas.project import (
    ProjectCreate,
    ProjectFilters,
    ProjectRead,
    ProjectStats,
    ProjectUpdate,
    StatusCount,
)
from src.painel.services.project_list import refine_by_search
from src.painel.services.status_registry import STATUS_OPTIONS

logger = get_logger(__name__)

PUBLISHED_STATUSES = (
    ProjectStatus.CONFIGURANDO_DOMINIO.value,
    ProjectStatus.AGUARDANDO_DNS.value,
)


def _status_image(project_id: UUID, status: str, client_name: str) -> dict[str, str]:
    return {"id": str(project_id), "status": status, "client_name": client_name}


class ProjectService:
    """Project operations. Owns commits; publishes status changes to the change feed."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        customization_repo: CustomizationRepository,
        session: AsyncSession,
        feed: ChangeFeed | None = None,
    ):
        self.project_repo = project_repo
        self.customization_repo = customization_repo
        self.session = session
        self.feed = feed

    async def list_projects(self, filters: ProjectFilters) -> list[ProjectRead]:
        """Query with the server filters, then refine by the search term."""
        projects = await self.project_repo.search(
            status=filters.status,
            responsible=filters.responsible,
            domain=filters.domain,
            date_from=filters.date_from,
            date_to=filters.date_to,
        )
        rows = [ProjectRead.model_validate(p) for p in projects]
        return refine_by_search(rows, filters.search)

    async def get(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise LookupError(f"Project {project_id} not found")
        return project

    async def create(self, data: ProjectCreate, personalization_id: UUID | None = None) -> Project:
        project = Project(
            client_name=data.client_name,
            template=data.template,
            responsible_name=data.responsible_name,
            domain=data.domain,
            client_type=data.client_type.value if data.client_type else None,
            partner_link=data.partner_link,
            blaster_link=data.blaster_link,
            status=data.status.value,
            personalization_id=personalization_id,
        )
        self.project_repo.add(project)

        try:
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project created", project_id=str(project.id), status=project.status)
        return project

    async def update(self, project_id: UUID, data: ProjectUpdate) -> Project:
        """Apply the provided fields. A status change is published like a board move."""
        project = await self.get(project_id)
        old_status = project.status

        update_data = data.model_dump(exclude_unset=True, mode="json")
        for field, value in update_data.items():
            if value is None and field in ("client_name", "status"):
                continue
            setattr(project, field, value)
        touch(project)

        try:
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise

        if project.status != old_status:
            await self._publish_status_change(
                project.id, old_status, project.status, project.client_name
            )
        return project

    async def change_status(
        self,
        project_id: UUID,
        new_status: str,
        expected_status: str | None = None,
    ) -> Project:
        """Move one project to new_status.

        With expected_status the write is a compare-and-set: it only applies
        when the stored status still equals expected_status, otherwise
        StatusConflictError is raised and nothing changes.
        """
        current = await self.get(project_id)
        old_status = current.status

        try:
            updated = await self.project_repo.update_status(project_id, new_status, expected_status)
            if not updated:
                await self.session.rollback()
                fresh = await self.project_repo.get_by_id(project_id)
                if fresh is None:
                    raise LookupError(f"Project {project_id} not found")
                raise StatusConflictError(expected_status or old_status, fresh.status)
            await self.session.commit()
        except (LookupError, StatusConflictError):
            raise
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(current)
        logger.info(
            "Project status changed",
            project_id=str(project_id),
            old_status=old_status,
            new_status=new_status,
        )
        if old_status != new_status:
            await self._publish_status_change(
                project_id, old_status, new_status, current.client_name
            )
        return current

    async def delete(self, project_id: UUID) -> None:
        """Delete customizations, then the project, as two separate commits."""
        await self.get(project_id)

        try:
            removed = await self.customization_repo.delete_for_project(project_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Project customizations deleted", project_id=str(project_id), count=removed)

        try:
            await self.project_repo.delete_by_id(project_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error(
                "Project delete failed after its customizations were removed",
                project_id=str(project_id),
            )
            raise
        logger.info("Project deleted", project_id=str(project_id))

    async def stats(self) -> ProjectStats:
        """Dashboard counters. Every number comes from a count query."""
        counts = await self.project_repo.status_counts()
        pipeline = [
            StatusCount(status=option.value, color=option.color, count=counts.get(option.value, 0))
            for option in STATUS_OPTIONS
        ]
        in_pipeline = sum(item.count for item in pipeline)

        return ProjectStats(
            total_clients=await self.project_repo.count(),
            partner_clients=await self.project_repo.count_by_client_type(ClientType.PARCEIRO.value),
            final_clients=await self.project_repo.count_by_client_type(
                ClientType.CLIENTE_FINAL.value
            ),
            sites_in_production=await self.project_repo.count_by_status(
                ProjectStatus.CRIANDO_SITE.value
            ),
            sites_published=await self.project_repo.count_by_status(*PUBLISHED_STATUSES),
            sites_ready=await self.project_repo.count_by_status(ProjectStatus.SITE_PRONTO.value),
            by_status=pipeline,
            other_statuses=sum(counts.values()) - in_pipeline,
        )

    async def _publish_status_change(
        self,
        project_id: UUID,
        old_status: str,
        new_status: str,
        client_name: str,
    ) -> None:
        if self.feed is None:
            return
        await self.feed.publish(
            ChangeEvent(
                table="projects",
                event_type=ChangeEventType.UPDATE,
                old=_status_image(project_id, old_status, client_name),
                new=_status_image(project_id, new_status, client_name),
            )
        )
