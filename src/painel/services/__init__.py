from src.painel.services.auth_service import AuthService
from src.painel.services.customization_service import CustomizationService
from src.painel.services.model_template_service import ModelTemplateService
from src.painel.services.personalization_service import PersonalizationService
from src.painel.services.project_service import ProjectService
from src.painel.services.user_service import UserService

__all__ = [
    "AuthService",
    "CustomizationService",
    "ModelTemplateService",
    "PersonalizationService",
    "ProjectService",
    "UserService",
]
