"""Filtered project list state.

Server-side filters go to the repository query; the free-text search term is
applied afterwards over the fetched rows. The view re-fetches whenever a
filter value changes and never serves a stale list after a failure.
"""

from collections.abc import Awaitable, Callable

from src.painel.core.logging import get_logger
from src.painel.schemas.common import Notice, error_notice
from src.painel.schemas.project import ProjectFilters, ProjectRead

logger = get_logger(__name__)

ProjectLoader = Callable[[ProjectFilters], Awaitable[list[ProjectRead]]]

LOAD_ERROR_TITLE = "Erro ao buscar projetos"
LOAD_ERROR_DESCRIPTION = "Não foi possível carregar a lista de projetos."


def refine_by_search(projects: list[ProjectRead], term: str | None) -> list[ProjectRead]:
    """Case-insensitive substring match on client name, template or responsible."""
    if not term or not term.strip():
        return list(projects)
    needle = term.strip().lower()

    def matches(project: ProjectRead) -> bool:
        fields = (project.client_name, project.template, project.responsible_name)
        return any(needle in value.lower() for value in fields if value)

    return [p for p in projects if matches(p)]


def is_uninitialized_error(error: BaseException) -> bool:
    return "not initialized" in str(error)


class ProjectListView:
    """Holds the current filters, the fetched projects and pending notices."""

    def __init__(self, loader: ProjectLoader, filters: ProjectFilters | None = None) -> None:
        self._loader = loader
        self.filters = filters or ProjectFilters()
        self.projects: list[ProjectRead] = []
        self.loading = False
        self.notices: list[Notice] = []

    @property
    def visible(self) -> list[ProjectRead]:
        return refine_by_search(self.projects, self.filters.search)

    async def set_filters(self, filters: ProjectFilters) -> list[ProjectRead]:
        """Apply new filters; any change in value triggers a fresh fetch."""
        if filters == self.filters and not self.loading:
            return self.visible
        self.filters = filters
        return await self.refresh()

    async def refresh(self) -> list[ProjectRead]:
        self.loading = True
        try:
            self.projects = await self._loader(self.filters)
        except Exception as e:
            self.projects = []
            if is_uninitialized_error(e):
                logger.debug("Project list skipped, gateway not ready", error=str(e))
            else:
                logger.error("Failed to load projects", error=str(e), exc_info=True)
                self.notices.append(error_notice(LOAD_ERROR_TITLE, LOAD_ERROR_DESCRIPTION))
        finally:
            self.loading = False
        return self.visible

    def drain_notices(self) -> list[Notice]:
        notices, self.notices = self.notices, []
        return notices
