"""Model template registry endpoints."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from src.painel.api.dependencies import CurrentUser, ModelTemplateServiceDep
from src.painel.schemas.model_template import (
    ModelTemplateCreate,
    ModelTemplateRead,
    ModelTemplateUpdate,
)
from src.painel.services.model_template_service import DuplicateCustomUrlError

router = APIRouter(prefix="/model-templates", tags=["model-templates"])


@router.get(
    "",
    response_model=list[ModelTemplateRead],
    summary="List model templates",
    description="All templates ordered by name, each with its public share URL.",
)
async def list_model_templates(
    service: ModelTemplateServiceDep,
    _user: CurrentUser,
) -> list[ModelTemplateRead]:
    return [service.to_read(t) for t in await service.list_all()]


@router.post(
    "",
    response_model=ModelTemplateRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create model template",
    responses={
        201: {"description": "Template created"},
        409: {"description": "Custom URL already in use"},
    },
)
async def create_model_template(
    data: ModelTemplateCreate,
    service: ModelTemplateServiceDep,
    _user: CurrentUser,
) -> ModelTemplateRead:
    try:
        template = await service.create(data)
    except DuplicateCustomUrlError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return service.to_read(template)


@router.patch(
    "/{template_id}",
    response_model=ModelTemplateRead,
    summary="Update model template",
    responses={
        200: {"description": "Template updated"},
        404: {"description": "Template not found"},
        409: {"description": "Custom URL already in use"},
    },
)
async def update_model_template(
    template_id: UUID,
    data: ModelTemplateUpdate,
    service: ModelTemplateServiceDep,
    _user: CurrentUser,
) -> ModelTemplateRead:
    try:
        template = await service.update(template_id, data)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except DuplicateCustomUrlError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return service.to_read(template)


@router.delete(
    "/{template_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete model template",
    responses={
        204: {"description": "Template deleted"},
        404: {"description": "Template not found"},
    },
)
async def delete_model_template(
    template_id: UUID,
    service: ModelTemplateServiceDep,
    _user: CurrentUser,
) -> None:
    try:
        await service.delete(template_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
