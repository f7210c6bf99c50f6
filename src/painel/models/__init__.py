"""Model exports.

Import from here: `from src.painel.models import Project, SitePersonalization`
"""

# Enums
from src.painel.models.enums import (
    EM_CUSTOMIZACAO,
    ClientType,
    CustomizationPriority,
    CustomizationStatus,
    NotificationType,
    ProjectStatus,
)

# Tables
from src.painel.models.personalization import ModelTemplate, SitePersonalization
from src.painel.models.project import Project, ProjectCustomization
from src.painel.models.user import User

__all__ = [
    # Enums
    "EM_CUSTOMIZACAO",
    "ClientType",
    "CustomizationPriority",
    "CustomizationStatus",
    "NotificationType",
    "ProjectStatus",
    # Tables
    "ModelTemplate",
    "Project",
    "ProjectCustomization",
    "SitePersonalization",
    "User",
]
