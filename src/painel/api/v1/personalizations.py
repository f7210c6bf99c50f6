"""Read access to personalization submissions and their files."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from src.painel.api.dependencies import CurrentUser, PersonalizationServiceDep
from src.painel.schemas.personalization import PersonalizationRead, SignedFile

router = APIRouter(prefix="/personalizations", tags=["personalizations"])


@router.get(
    "/{personalization_id}",
    response_model=PersonalizationRead,
    summary="Get personalization",
    description="Submission data with stored file references resolved to tagged variants.",
    responses={404: {"description": "Personalization not found"}},
)
async def get_personalization(
    personalization_id: UUID,
    service: PersonalizationServiceDep,
    _user: CurrentUser,
) -> PersonalizationRead:
    try:
        return await service.get_detail(personalization_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get(
    "/{personalization_id}/files",
    response_model=list[SignedFile],
    summary="Signed file URLs",
    description=(
        "Time-limited URLs for the logo, testimonial and media files. A file the "
        "storage refuses to sign has `signed_url: null`."
    ),
    responses={
        404: {"description": "Personalization not found"},
        503: {"description": "Storage not configured"},
    },
)
async def get_personalization_files(
    personalization_id: UUID,
    service: PersonalizationServiceDep,
    _user: CurrentUser,
) -> list[SignedFile]:
    try:
        return await service.signed_files(personalization_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
