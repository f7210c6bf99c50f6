import re
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

CUSTOM_URL_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _validate_custom_url(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip().lower()
    if not v:
        return None
    if not CUSTOM_URL_PATTERN.match(v):
        raise ValueError("Custom URL may only contain lowercase letters, digits and single hyphens")
    return v


class ModelTemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    image_url: str | None = Field(default=None, max_length=1000)
    custom_url: str | None = Field(default=None, max_length=100)

    @field_validator("custom_url")
    @classmethod
    def validate_custom_url(cls, v: str | None) -> str | None:
        return _validate_custom_url(v)


class ModelTemplateUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    image_url: str | None = Field(default=None, max_length=1000)
    custom_url: str | None = Field(default=None, max_length=100)

    @field_validator("custom_url")
    @classmethod
    def validate_custom_url(cls, v: str | None) -> str | None:
        return _validate_custom_url(v)


class ModelTemplateRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    image_url: str | None
    custom_url: str | None
    share_url: str
    created_at: datetime
    updated_at: datetime


class ResolvedModel(BaseModel):
    """Branding for a public form URL segment.

    `found` is False when nothing matched and the default model was used.
    """

    model_id: str
    name: str
    description: str | None = None
    image_url: str | None = None
    source: Literal["custom_url", "id", "catalog", "default"]
    found: bool = True
    error: str | None = None
