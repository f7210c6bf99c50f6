"""Project schemas for API request/response."""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.painel.models.enums import ClientType, ProjectStatus
from src.painel.schemas.common import Notice


def _strip_or_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    client_name: str = Field(min_length=1, max_length=200)
    template: str | None = Field(default=None, max_length=200)
    responsible_name: str | None = Field(default=None, max_length=200)
    domain: str | None = Field(default=None, max_length=255)
    client_type: ClientType | None = None
    partner_link: str | None = Field(default=None, max_length=500)
    blaster_link: str | None = Field(default=None, max_length=500)
    status: ProjectStatus = ProjectStatus.RECEBIDO

    @field_validator("client_name")
    @classmethod
    def validate_client_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Client name cannot be empty or whitespace only")
        return v

    @field_validator("template", "responsible_name", "domain", "partner_link", "blaster_link")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return _strip_or_none(v)


class ProjectUpdate(BaseModel):
    """Schema for editing a project. Only provided fields change."""

    client_name: str | None = Field(default=None, min_length=1, max_length=200)
    template: str | None = Field(default=None, max_length=200)
    responsible_name: str | None = Field(default=None, max_length=200)
    domain: str | None = Field(default=None, max_length=255)
    client_type: ClientType | None = None
    partner_link: str | None = Field(default=None, max_length=500)
    blaster_link: str | None = Field(default=None, max_length=500)
    status: ProjectStatus | None = None

    @field_validator("client_name")
    @classmethod
    def validate_client_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Client name cannot be empty or whitespace only")
        return v

    @field_validator("template", "responsible_name", "domain", "partner_link", "blaster_link")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return _strip_or_none(v)


class ProjectRead(BaseModel):
    id: UUID
    client_name: str
    template: str | None
    responsible_name: str | None
    domain: str | None
    client_type: str | None
    partner_link: str | None
    blaster_link: str | None
    personalization_id: UUID | None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectFilters(BaseModel):
    """List filters. Everything but `search` is applied by the database query."""

    status: str | None = None
    responsible: str | None = None
    domain: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    search: str | None = None

    model_config = {"frozen": True}

    @field_validator("status", "responsible", "domain", "search")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return _strip_or_none(v)

    @model_validator(mode="after")
    def validate_range(self) -> "ProjectFilters":
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from must not be after date_to")
        return self


class ProjectListResponse(BaseModel):
    items: list[ProjectRead]
    total: int
    notices: list[Notice] = []


class StatusChangeRequest(BaseModel):
    """Move a project to another pipeline status.

    When `expected_status` is given the update only applies if the stored
    status still equals it; otherwise the request fails with 409.
    """

    project_id: UUID
    status: ProjectStatus
    expected_status: str | None = None
    source: Literal["drag", "button"] = "button"


class StatusCount(BaseModel):
    status: str
    color: str
    count: int


class ProjectStats(BaseModel):
    total_clients: int
    partner_clients: int
    final_clients: int
    sites_in_production: int
    sites_published: int
    sites_ready: int
    by_status: list[StatusCount]
    other_statuses: int


class CommandRead(BaseModel):
    project_id: UUID
    kind: Literal["site", "egestor"]
    command: str


class ProjectDetail(ProjectRead):
    """A project plus the display name of its template."""

    template_name: str


class BoardColumnRead(BaseModel):
    status: str
    color: str
    icon: str
    count: int
    projects: list[ProjectRead]


class BoardRead(BaseModel):
    columns: list[BoardColumnRead]


class MoveResult(BaseModel):
    applied: bool
    project: ProjectRead | None = None
    notice: Notice | None = None
