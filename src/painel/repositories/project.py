"""Repositories for projects and their customizations."""

from datetime import date, datetime, time
from uuid import UUID

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, update
from sqlmodel import col, select

from src.painel.models import Project, ProjectCustomization
from src.painel.models.base import utc_now
from src.painel.repositories.base import BaseRepository, escape_like


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def search(
        self,
        status: str | None = None,
        responsible: str | None = None,
        domain: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Project]:
        """Select projects by the server-side filters, newest first.

        Substring filters are case-insensitive; the date range is inclusive
        on both ends at day granularity.
        """
        query = select(Project)
        if status:
            query = query.where(Project.status == status)
        if responsible:
            query = query.where(
                col(Project.responsible_name).ilike(f"%{escape_like(responsible)}%", escape="\\")
            )
        if domain:
            query = query.where(col(Project.domain).ilike(f"%{escape_like(domain)}%", escape="\\"))
        if date_from:
            query = query.where(Project.created_at >= datetime.combine(date_from, time.min))
        if date_to:
            query = query.where(Project.created_at <= datetime.combine(date_to, time.max))

        result = await self.session.execute(query.order_by(col(Project.created_at).desc()))
        return list(result.scalars().all())

    async def update_status(
        self,
        project_id: UUID,
        new_status: str,
        expected_status: str | None = None,
    ) -> bool:
        """Set status in a single UPDATE, optionally guarded by the current value.

        Returns False when no row matched (missing project or guard mismatch).
        """
        stmt = (
            update(Project)
            .where(col(Project.id) == project_id)
            .values(status=new_status, updated_at=utc_now())
        )
        if expected_status is not None:
            stmt = stmt.where(col(Project.status) == expected_status)
        result = await self.session.execute(stmt)
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def count_by_status(self, *statuses: str) -> int:
        return await self.count(col(Project.status).in_(statuses))

    async def count_by_client_type(self, client_type: str) -> int:
        return await self.count(Project.client_type == client_type)

    async def status_counts(self) -> dict[str, int]:
        """Row counts grouped by status value."""
        result = await self.session.execute(
            select(Project.status, func.count()).group_by(Project.status)
        )
        return {row[0]: int(row[1]) for row in result.all()}


class CustomizationRepository(BaseRepository[ProjectCustomization]):
    model = ProjectCustomization

    async def list_for_project(self, project_id: UUID) -> list[ProjectCustomization]:
        """All customizations of a project, most recently requested first."""
        result = await self.session.execute(
            select(ProjectCustomization)
            .where(ProjectCustomization.project_id == project_id)
            .order_by(col(ProjectCustomization.requested_at).desc())
        )
        return list(result.scalars().all())

    async def delete_for_project(self, project_id: UUID) -> int:
        result = await self.session.execute(
            sa_delete(ProjectCustomization).where(
                col(ProjectCustomization.project_id) == project_id
            )
        )
        return result.rowcount  # type: ignore[attr-defined, no-any-return]
