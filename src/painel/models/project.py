"""Project and customization models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.painel.models.base import utc_now
from src.painel.models.enums import (
    CustomizationPriority,
    CustomizationStatus,
    ProjectStatus,
)


class Project(SQLModel, table=True):
    """A client website-production job.

    `status` is stored as plain text: pipeline values plus "Em Customização"
    and any legacy value a row may already carry.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    client_name: str = Field(max_length=200, index=True)
    template: str | None = Field(default=None, max_length=200)
    responsible_name: str | None = Field(default=None, max_length=200)
    domain: str | None = Field(default=None, max_length=255)
    client_type: str | None = Field(default=None, max_length=50)
    partner_link: str | None = Field(default=None, max_length=500)
    blaster_link: str | None = Field(default=None, max_length=500)
    personalization_id: UUID | None = Field(
        default=None, foreign_key="site_personalizacoes.id", index=True
    )
    status: str = Field(default=ProjectStatus.RECEBIDO.value, max_length=50, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectCustomization(SQLModel, table=True):
    __tablename__ = "project_customizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    description: str = Field(max_length=2000)
    priority: str = Field(default=CustomizationPriority.MEDIA.value, max_length=20)
    status: str = Field(default=CustomizationStatus.SOLICITADO.value, max_length=20)
    requested_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = Field(default=None)
    notes: str | None = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
