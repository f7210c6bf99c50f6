"""Public-form submissions and the templates that brand them."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.painel.models.base import utc_now


class SitePersonalization(SQLModel, table=True):
    """One submission of the public personalization form. Never updated.

    `depoimento_urls` holds storage paths in upload order; `midia_urls` holds
    `{"url", "caption"}` objects in upload order.
    """

    __tablename__ = "site_personalizacoes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    office_nome: str = Field(max_length=200)
    responsavel_nome: str = Field(max_length=200)
    telefone: str = Field(max_length=40)
    email: str = Field(max_length=255)
    endereco: str = Field(max_length=500)
    redes_sociais: str | None = Field(default=None, max_length=1000)
    fonte: str | None = Field(default=None, max_length=100)
    paleta_cores: str | None = Field(default=None, max_length=500)
    descricao: str = Field(max_length=5000)
    slogan: str | None = Field(default=None, max_length=500)
    possui_planos: bool = Field(default=False)
    planos: str | None = Field(default=None, max_length=5000)
    servicos: str = Field(max_length=5000)
    depoimentos: str | None = Field(default=None, max_length=5000)
    botao_whatsapp: bool = Field(default=True)
    possui_mapa: bool = Field(default=False)
    link_mapa: str | None = Field(default=None, max_length=1000)
    modelo: str | None = Field(default=None, max_length=200)
    logo_url: str | None = Field(default=None, max_length=1000)
    depoimento_urls: list[Any] = Field(default_factory=list, sa_column=Column(JSON))
    midia_urls: list[Any] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utc_now)


class ModelTemplate(SQLModel, table=True):
    """Site design choice. `custom_url` uniqueness is checked by the service, not the table."""

    __tablename__ = "model_templates"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=1000)
    image_url: str | None = Field(default=None, max_length=1000)
    custom_url: str | None = Field(default=None, max_length=100, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
