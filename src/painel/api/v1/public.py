"""Public personalization form. No authentication."""

from typing import Any

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
from starlette.datastructures import FormData, UploadFile

from src.painel.api.dependencies import ModelTemplateServiceDep, PersonalizationServiceDep
from src.painel.schemas.model_template import ResolvedModel
from src.painel.schemas.personalization import (
    ConfirmationRead,
    PersonalizationForm,
    SubmissionResult,
)
from src.painel.services.file_upload import PendingFile
from src.painel.services.personalization_service import (
    ConfirmationRequiredError,
    Section,
    SubmissionError,
    check_file_size,
)

router = APIRouter(tags=["public"])

LOGO_FIELD = "logoFile"
TESTIMONIAL_FIELD = "depoimentoFiles"
MEDIA_FIELD = "midiaFiles"
CAPTION_FIELD = "midiaCaptions"
CONFIRM_FIELD = "confirmarSemArquivos"

_FILE_FIELDS = {LOGO_FIELD, TESTIMONIAL_FIELD, MEDIA_FIELD, CAPTION_FIELD, CONFIRM_FIELD}
_TRUTHY = {"1", "true", "on", "yes", "sim"}


async def read_upload(upload: UploadFile, section: Section, max_size_mb: int) -> PendingFile:
    """Read one part into memory, refusing it first when its parsed size is over the limit."""
    if upload.size is not None:
        check_file_size(section, upload.filename or "", upload.size, max_size_mb)
    return PendingFile(
        filename=upload.filename or "",
        content=await upload.read(),
        content_type=upload.content_type or "application/octet-stream",
    )


async def _read_uploads(
    form: FormData, field: str, section: Section, max_size_mb: int
) -> list[PendingFile]:
    # Browsers send an empty part for a file input left blank
    uploads = [u for u in form.getlist(field) if isinstance(u, UploadFile) and u.filename]
    return [await read_upload(u, section, max_size_mb) for u in uploads]


def _form_fields(form: FormData) -> dict[str, Any]:
    return {
        key: value
        for key, value in form.multi_items()
        if key not in _FILE_FIELDS and isinstance(value, str)
    }


@router.get(
    "/formulario/{modelo}",
    response_model=ResolvedModel,
    summary="Resolve form model",
    description=(
        "Branding for the public form. The segment may be a custom URL, a template id "
        "or a catalog id; unknown segments fall back to the default model with "
        "`found: false`."
    ),
)
async def get_form_model(modelo: str, templates: ModelTemplateServiceDep) -> ResolvedModel:
    return await templates.resolve(modelo)


@router.post(
    "/formulario/{modelo}",
    response_model=SubmissionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Submit personalization",
    description=(
        "Multipart submission. Text fields use camelCase names (officeNome, "
        f"possuiMapa, ...). Files go in `{LOGO_FIELD}`, `{TESTIMONIAL_FIELD}` and "
        f"`{MEDIA_FIELD}`; `{CAPTION_FIELD}` pairs with media files by position. "
        f"Without any file, `{CONFIRM_FIELD}=true` is required."
    ),
    responses={
        201: {"description": "Personalization saved; see notices for skipped files"},
        400: {"description": "Submission stopped (file too large, logo upload failed)"},
        422: {"description": "Invalid form fields"},
        428: {"description": "No files attached and no confirmation given"},
    },
)
async def submit_form(
    modelo: str,
    request: Request,
    templates: ModelTemplateServiceDep,
    service: PersonalizationServiceDep,
) -> SubmissionResult:
    form = await request.form()
    try:
        fields = _form_fields(form)
        if not fields.get("modelo"):
            fields["modelo"] = (await templates.resolve(modelo)).model_id
        data = PersonalizationForm.model_validate(fields)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=jsonable_encoder(e.errors(include_url=False, include_context=False)),
        ) from e

    captions = [c for c in form.getlist(CAPTION_FIELD) if isinstance(c, str)]
    confirmed = str(form.get(CONFIRM_FIELD, "")).strip().lower() in _TRUTHY

    limit = service.max_file_size_mb
    logo_upload = form.get(LOGO_FIELD)
    try:
        logo = (
            await read_upload(logo_upload, "logo", limit)
            if isinstance(logo_upload, UploadFile) and logo_upload.filename
            else None
        )
        return await service.submit(
            data,
            logo=logo,
            testimonials=await _read_uploads(form, TESTIMONIAL_FIELD, "depoimento", limit),
            media=await _read_uploads(form, MEDIA_FIELD, "midia", limit),
            captions=captions,
            confirmed_without_files=confirmed,
        )
    except ConfirmationRequiredError as e:
        raise HTTPException(status_code=status.HTTP_428_PRECONDITION_REQUIRED, detail=str(e)) from e
    except SubmissionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    finally:
        await form.close()


@router.get(
    "/confirmacao",
    response_model=ConfirmationRead,
    summary="Submission confirmation",
)
async def get_confirmation() -> ConfirmationRead:
    return ConfirmationRead(
        title="Personalização Enviada!",
        description="Suas informações foram recebidas com sucesso.",
        messages=[
            "Agradecemos por nos fornecer os detalhes da sua empresa. Nossa equipe irá "
            "utilizar essas informações para criar o seu site personalizado.",
            "Você receberá uma notificação assim que seu site estiver pronto para revisão.",
        ],
    )
