"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, UserFactory, ...
"""

from tests.factories.base import BaseFactory, BaseSchemaFactory, generate_uuid, utc_now
from tests.factories.project import (
    CustomizationFactory,
    ModelTemplateFactory,
    PersonalizationFactory,
    ProjectFactory,
    ProjectReadFactory,
)
from tests.factories.user import DEFAULT_TEST_PASSWORD, UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "BaseSchemaFactory",
    "generate_uuid",
    "utc_now",
    # Project
    "CustomizationFactory",
    "ModelTemplateFactory",
    "PersonalizationFactory",
    "ProjectFactory",
    "ProjectReadFactory",
    # User
    "DEFAULT_TEST_PASSWORD",
    "UserFactory",
]
