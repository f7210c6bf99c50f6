"""Customization request endpoints."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from src.painel.api.dependencies import CurrentUser, CustomizationServiceDep
from src.painel.schemas.customization import (
    CustomizationCreate,
    CustomizationRead,
    CustomizationStatusUpdate,
)

router = APIRouter(tags=["customizations"])


@router.get(
    "/projects/{project_id}/customizations",
    response_model=list[CustomizationRead],
    summary="List customizations",
    description="Customization requests of a project, most recently requested first.",
)
async def list_customizations(
    project_id: UUID,
    service: CustomizationServiceDep,
    _user: CurrentUser,
) -> list[CustomizationRead]:
    items = await service.list_for_project(project_id)
    return [CustomizationRead.model_validate(c) for c in items]


@router.post(
    "/projects/{project_id}/customizations",
    response_model=CustomizationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Request a customization",
    description=(
        "Creates the request as Solicitado and moves the project to "
        '"Em Customização" unless it is already there.'
    ),
    responses={
        201: {"description": "Customization created"},
        404: {"description": "Project not found"},
    },
)
async def create_customization(
    project_id: UUID,
    data: CustomizationCreate,
    service: CustomizationServiceDep,
    _user: CurrentUser,
) -> CustomizationRead:
    try:
        customization = await service.create(project_id, data)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return CustomizationRead.model_validate(customization)


@router.patch(
    "/customizations/{customization_id}",
    response_model=CustomizationRead,
    summary="Change customization status",
    responses={
        200: {"description": "Status updated"},
        404: {"description": "Customization not found"},
    },
)
async def update_customization_status(
    customization_id: UUID,
    data: CustomizationStatusUpdate,
    service: CustomizationServiceDep,
    _user: CurrentUser,
) -> CustomizationRead:
    try:
        customization = await service.update_status(customization_id, data)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return CustomizationRead.model_validate(customization)


@router.delete(
    "/customizations/{customization_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete customization",
    responses={
        204: {"description": "Customization deleted"},
        404: {"description": "Customization not found"},
    },
)
async def delete_customization(
    customization_id: UUID,
    service: CustomizationServiceDep,
    _user: CurrentUser,
) -> None:
    try:
        await service.delete(customization_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
