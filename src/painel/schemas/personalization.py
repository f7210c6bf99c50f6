"""Public personalization form and stored file references."""

import json
import re
from datetime import datetime
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.painel.schemas.common import Notice

MIN_PHONE_DIGITS = 10


def _optional_text(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


class PersonalizationForm(BaseModel):
    """Fields of the public form, accepted in camelCase (officeNome, possuiMapa, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    office_nome: str = Field(min_length=2, max_length=200)
    responsavel_nome: str = Field(min_length=2, max_length=200)
    telefone: str = Field(max_length=40)
    email: EmailStr
    endereco: str = Field(min_length=5, max_length=500)
    redes_sociais: str | None = Field(default=None, max_length=1000)
    fonte: str | None = Field(default=None, max_length=100)
    paleta_cores: str | None = Field(default=None, max_length=500)
    descricao: str = Field(min_length=10, max_length=5000)
    slogan: str | None = Field(default=None, max_length=500)
    possui_planos: bool = False
    planos: str | None = Field(default=None, max_length=5000)
    servicos: str = Field(min_length=5, max_length=5000)
    depoimentos: str | None = Field(default=None, max_length=5000)
    botao_whatsapp: bool = True
    possui_mapa: bool = False
    link_mapa: str | None = Field(default=None, max_length=1000)
    modelo: str | None = Field(default=None, max_length=200)

    @field_validator(
        "office_nome", "responsavel_nome", "endereco", "descricao", "servicos", mode="before"
    )
    @classmethod
    def strip_required(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("telefone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        digits = re.sub(r"\D", "", v)
        if len(digits) < MIN_PHONE_DIGITS:
            raise ValueError(f"Phone must contain at least {MIN_PHONE_DIGITS} digits")
        return v.strip()

    @field_validator(
        "redes_sociais",
        "fonte",
        "paleta_cores",
        "slogan",
        "planos",
        "depoimentos",
        "link_mapa",
        "modelo",
    )
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return _optional_text(v)

    @model_validator(mode="after")
    def drop_gated_fields(self) -> "PersonalizationForm":
        # Toggled-off sections are not stored even if the browser kept their text
        if not self.possui_mapa:
            self.link_mapa = None
        if not self.possui_planos:
            self.planos = None
        return self


def normalize_storage_path(path: str) -> str:
    return re.sub(r"/{2,}", "/", path.strip())


class FileReference(BaseModel):
    kind: Literal["file"] = "file"
    path: str


class CaptionedReference(BaseModel):
    kind: Literal["captioned"] = "captioned"
    path: str
    caption: str = ""


StoredReference = Annotated[FileReference | CaptionedReference, Field(discriminator="kind")]


def parse_file_reference(raw: Any) -> FileReference | CaptionedReference | None:
    """Resolve one stored reference into its tagged form.

    Rows written by older clients hold either a bare path, a `{url, caption}`
    object, or that object serialized as a JSON string. Anything without a
    usable path yields None.
    """
    if isinstance(raw, str):
        text = raw.strip()
        if text.startswith("{"):
            try:
                raw = json.loads(text)
            except json.JSONDecodeError:
                return FileReference(path=normalize_storage_path(text))
        elif text:
            return FileReference(path=normalize_storage_path(text))
        else:
            return None

    if isinstance(raw, dict):
        path = raw.get("url") or raw.get("path")
        if not isinstance(path, str) or not path.strip():
            return None
        caption = raw.get("caption")
        if "caption" in raw or raw.get("kind") == "captioned":
            return CaptionedReference(
                path=normalize_storage_path(path),
                caption=caption if isinstance(caption, str) else "",
            )
        return FileReference(path=normalize_storage_path(path))

    return None


def parse_file_references(raw: Any) -> list[FileReference | CaptionedReference]:
    if not isinstance(raw, list):
        return []
    parsed = (parse_file_reference(item) for item in raw)
    return [ref for ref in parsed if ref is not None]


class PersonalizationRead(BaseModel):
    id: UUID
    office_nome: str
    responsavel_nome: str
    telefone: str
    email: str
    endereco: str
    redes_sociais: str | None
    fonte: str | None
    paleta_cores: str | None
    descricao: str
    slogan: str | None
    possui_planos: bool
    planos: str | None
    servicos: str
    depoimentos: str | None
    botao_whatsapp: bool
    possui_mapa: bool
    link_mapa: str | None
    modelo: str | None
    logo: FileReference | None
    depoimento_files: list[StoredReference]
    midia_files: list[StoredReference]
    created_at: datetime


class SignedFile(BaseModel):
    section: Literal["logo", "depoimento", "midia"]
    path: str
    file_name: str
    display_name: str
    caption: str = ""
    is_image: bool
    signed_url: str | None
    exists: bool = True


class SubmissionResult(BaseModel):
    personalization_id: UUID
    project_id: UUID | None
    redirect_to: str
    notices: list[Notice] = []
    skipped_files: list[str] = []


class ConfirmationRead(BaseModel):
    title: str
    description: str
    messages: list[str]
