"""Project endpoints: list/filter, CRUD, dashboard stats and production commands."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from src.painel.api.dependencies import (
    CurrentUser,
    ModelTemplateServiceDep,
    PersonalizationRepo,
    ProjectServiceDep,
)
from src.painel.schemas.project import (
    CommandRead,
    ProjectCreate,
    ProjectDetail,
    ProjectFilters,
    ProjectListResponse,
    ProjectRead,
    ProjectStats,
    ProjectUpdate,
)
from src.painel.services.command_service import egestor_command, site_command
from src.painel.services.project_list import ProjectListView

router = APIRouter(prefix="/projects", tags=["projects"])


def _not_found(e: LookupError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List projects",
    description=(
        "Filter by exact status, responsible and domain substrings and an inclusive "
        "creation date range; `search` then narrows by client name, template or "
        "responsible. Newest first. A failed fetch returns an empty list with a notice."
    ),
    responses={
        200: {"description": "Filtered projects"},
        422: {"description": "Invalid filters (e.g. date_from after date_to)"},
    },
)
async def list_projects(
    filters: Annotated[ProjectFilters, Query()],
    service: ProjectServiceDep,
    _user: CurrentUser,
) -> ProjectListResponse:
    view = ProjectListView(service.list_projects, filters)
    items = await view.refresh()
    return ProjectListResponse(items=items, total=len(items), notices=view.drain_notices())


@router.get(
    "/stats",
    response_model=ProjectStats,
    summary="Dashboard statistics",
    description="Client and pipeline counters computed with count-only queries.",
)
async def get_stats(service: ProjectServiceDep, _user: CurrentUser) -> ProjectStats:
    return await service.stats()


@router.get(
    "/{project_id}",
    response_model=ProjectDetail,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    service: ProjectServiceDep,
    templates: ModelTemplateServiceDep,
    _user: CurrentUser,
) -> ProjectDetail:
    try:
        project = await service.get(project_id)
    except LookupError as e:
        raise _not_found(e) from e
    return ProjectDetail(
        **ProjectRead.model_validate(project).model_dump(),
        template_name=await templates.model_name(project.template),
    )


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={201: {"description": "Project created"}},
)
async def create_project(
    data: ProjectCreate,
    service: ProjectServiceDep,
    _user: CurrentUser,
) -> ProjectRead:
    project = await service.create(data)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Update only the provided fields. `created_at` never changes.",
    responses={
        200: {"description": "Project updated"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    service: ProjectServiceDep,
    _user: CurrentUser,
) -> ProjectRead:
    try:
        project = await service.update(project_id, data)
    except LookupError as e:
        raise _not_found(e) from e
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Deletes the project's customizations first, then the project.",
    responses={
        204: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID,
    service: ProjectServiceDep,
    _user: CurrentUser,
) -> None:
    try:
        await service.delete(project_id)
    except LookupError as e:
        raise _not_found(e) from e


@router.get(
    "/{project_id}/commands/site",
    response_model=CommandRead,
    summary="Site build command",
    description=(
        "Brief for the site builder. Includes the personalization submission "
        "when the project was created from one."
    ),
    responses={404: {"description": "Project not found"}},
)
async def get_site_command(
    project_id: UUID,
    service: ProjectServiceDep,
    personalizations: PersonalizationRepo,
    _user: CurrentUser,
) -> CommandRead:
    try:
        project = await service.get(project_id)
    except LookupError as e:
        raise _not_found(e) from e

    personalization = None
    if project.personalization_id is not None:
        personalization = await personalizations.get_by_id(project.personalization_id)
    return CommandRead(
        project_id=project.id,
        kind="site",
        command=site_command(project, personalization),
    )


@router.get(
    "/{project_id}/commands/egestor",
    response_model=CommandRead,
    summary="eGestor advertisement command",
    responses={404: {"description": "Project not found"}},
)
async def get_egestor_command(
    project_id: UUID,
    service: ProjectServiceDep,
    _user: CurrentUser,
) -> CommandRead:
    try:
        project = await service.get(project_id)
    except LookupError as e:
        raise _not_found(e) from e
    return CommandRead(project_id=project.id, kind="egestor", command=egestor_command(project))
