"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.painel.api.dependencies.auth import CurrentUser, get_current_user

# Database
from src.painel.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.painel.api.dependencies.repositories import (
    CustomizationRepo,
    ModelTemplateRepo,
    PersonalizationRepo,
    ProjectRepo,
    UserRepo,
)

# Services
from src.painel.api.dependencies.services import (
    AppSettings,
    AuthServiceDep,
    BoardGuard,
    CustomizationServiceDep,
    ModelTemplateServiceDep,
    NotificationEngineDep,
    PersonalizationServiceDep,
    ProjectServiceDep,
    UserServiceDep,
    get_notification_engine,
    get_storage_client,
)

__all__ = [
    # Auth
    "CurrentUser",
    "get_current_user",
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "CustomizationRepo",
    "ModelTemplateRepo",
    "PersonalizationRepo",
    "ProjectRepo",
    "UserRepo",
    # Services
    "AppSettings",
    "AuthServiceDep",
    "BoardGuard",
    "CustomizationServiceDep",
    "ModelTemplateServiceDep",
    "NotificationEngineDep",
    "PersonalizationServiceDep",
    "ProjectServiceDep",
    "UserServiceDep",
    "get_notification_engine",
    "get_storage_client",
]
