"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.painel.api.dependencies.db import DBSession
from src.painel.repositories import (
    CustomizationRepository,
    ModelTemplateRepository,
    PersonalizationRepository,
    ProjectRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_customization_repository(session: DBSession) -> CustomizationRepository:
    return CustomizationRepository(session)


def get_personalization_repository(session: DBSession) -> PersonalizationRepository:
    return PersonalizationRepository(session)


def get_model_template_repository(session: DBSession) -> ModelTemplateRepository:
    return ModelTemplateRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
CustomizationRepo = Annotated[CustomizationRepository, Depends(get_customization_repository)]
PersonalizationRepo = Annotated[
    PersonalizationRepository, Depends(get_personalization_repository)
]
ModelTemplateRepo = Annotated[ModelTemplateRepository, Depends(get_model_template_repository)]
