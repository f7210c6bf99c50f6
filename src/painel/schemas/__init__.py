from src.painel.schemas.auth import LoginRequest, LoginResponse, SessionRead
from src.painel.schemas.common import Notice, error_notice
from src.painel.schemas.customization import (
    CustomizationCreate,
    CustomizationRead,
    CustomizationStatusUpdate,
)
from src.painel.schemas.model_template import (
    ModelTemplateCreate,
    ModelTemplateRead,
    ModelTemplateUpdate,
    ResolvedModel,
)
from src.painel.schemas.notification import (
    Notification,
    NotificationActionResult,
    NotificationList,
)
from src.painel.schemas.personalization import (
    CaptionedReference,
    FileReference,
    PersonalizationForm,
    PersonalizationRead,
    SignedFile,
    SubmissionResult,
)
from src.painel.schemas.project import (
    ProjectCreate,
    ProjectFilters,
    ProjectRead,
    ProjectStats,
    ProjectUpdate,
    StatusChangeRequest,
)
from src.painel.schemas.user import UserCreate, UserRead

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "SessionRead",
    # Common
    "Notice",
    "error_notice",
    # Customization
    "CustomizationCreate",
    "CustomizationRead",
    "CustomizationStatusUpdate",
    # Model template
    "ModelTemplateCreate",
    "ModelTemplateRead",
    "ModelTemplateUpdate",
    "ResolvedModel",
    # Notification
    "Notification",
    "NotificationActionResult",
    "NotificationList",
    # Personalization
    "CaptionedReference",
    "FileReference",
    "PersonalizationForm",
    "PersonalizationRead",
    "SignedFile",
    "SubmissionResult",
    # Project
    "ProjectCreate",
    "ProjectFilters",
    "ProjectRead",
    "ProjectStats",
    "ProjectUpdate",
    "StatusChangeRequest",
    # User
    "UserCreate",
    "UserRead",
]
