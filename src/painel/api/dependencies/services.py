"""Service factory dependencies.

Process-wide collaborators (notification engine, storage client) are created
by the application lifespan and read from app.state here.
"""

from typing import Annotated

from fastapi import Depends, Request

from src.painel.api.dependencies.db import DBSession
from src.painel.api.dependencies.repositories import (
    CustomizationRepo,
    ModelTemplateRepo,
    PersonalizationRepo,
    ProjectRepo,
    UserRepo,
)
from src.painel.core.config import Settings, get_settings
from src.painel.core.exceptions import GatewayNotInitializedError
from src.painel.core.realtime import get_change_feed
from src.painel.services.auth_service import AuthService
from src.painel.services.customization_service import CustomizationService
from src.painel.services.file_upload import FileUploader
from src.painel.services.kanban_board import TransitionGuard, get_transition_guard
from src.painel.services.model_template_service import ModelTemplateService
from src.painel.services.notification_service import NotificationEngine
from src.painel.services.personalization_service import PersonalizationService
from src.painel.services.project_service import ProjectService
from src.painel.services.storage_service import StorageClient
from src.painel.services.user_service import UserService

AppSettings = Annotated[Settings, Depends(get_settings)]


def get_storage_client(request: Request) -> StorageClient:
    storage: StorageClient | None = getattr(request.app.state, "storage", None)
    if storage is None:
        raise GatewayNotInitializedError("storage")
    return storage


def get_notification_engine(request: Request) -> NotificationEngine:
    engine: NotificationEngine | None = getattr(request.app.state, "notification_engine", None)
    if engine is None:
        raise GatewayNotInitializedError("notification store")
    return engine


def get_user_service(user_repo: UserRepo, session: DBSession) -> UserService:
    """Get user service."""
    return UserService(user_repo, session)


def get_auth_service(user_repo: UserRepo) -> AuthService:
    """Get auth service."""
    return AuthService(user_repo)


def get_project_service(
    project_repo: ProjectRepo,
    customization_repo: CustomizationRepo,
    session: DBSession,
) -> ProjectService:
    """Get project service publishing to the process-wide change feed."""
    return ProjectService(project_repo, customization_repo, session, get_change_feed())


def get_customization_service(
    customization_repo: CustomizationRepo,
    project_repo: ProjectRepo,
    project_service: Annotated[ProjectService, Depends(get_project_service)],
    session: DBSession,
) -> CustomizationService:
    return CustomizationService(customization_repo, project_repo, project_service, session)


def get_model_template_service(
    repo: ModelTemplateRepo,
    session: DBSession,
    settings: AppSettings,
) -> ModelTemplateService:
    return ModelTemplateService(repo, session, settings.app_url, settings.default_model_id)


def get_personalization_service(
    personalization_repo: PersonalizationRepo,
    project_repo: ProjectRepo,
    session: DBSession,
    storage: Annotated[StorageClient, Depends(get_storage_client)],
    settings: AppSettings,
) -> PersonalizationService:
    return PersonalizationService(
        personalization_repo,
        project_repo,
        session,
        FileUploader.from_settings(storage, settings),
        storage,
        settings.storage_signed_url_ttl_seconds,
    )


def get_board_guard() -> TransitionGuard:
    return get_transition_guard()


# Type aliases for cleaner route signatures
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
CustomizationServiceDep = Annotated[CustomizationService, Depends(get_customization_service)]
ModelTemplateServiceDep = Annotated[ModelTemplateService, Depends(get_model_template_service)]
PersonalizationServiceDep = Annotated[
    PersonalizationService, Depends(get_personalization_service)
]
NotificationEngineDep = Annotated[NotificationEngine, Depends(get_notification_engine)]
BoardGuard = Annotated[TransitionGuard, Depends(get_board_guard)]
