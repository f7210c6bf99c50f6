"""Repository layer - data access abstraction."""

from src.painel.repositories.base import BaseRepository
from src.painel.repositories.personalization import (
    ModelTemplateRepository,
    PersonalizationRepository,
)
from src.painel.repositories.project import CustomizationRepository, ProjectRepository
from src.painel.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CustomizationRepository",
    "ModelTemplateRepository",
    "PersonalizationRepository",
    "ProjectRepository",
    "UserRepository",
]
