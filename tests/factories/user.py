"""User factory for test data generation."""

from polyfactory import Use

from src.painel.core.security import hash_password
from src.painel.models import User
from tests.factories.base import BaseFactory, generate_uuid, utc_now

# Default test password - stored for convenience in tests
DEFAULT_TEST_PASSWORD = "testpassword123"


class UserFactory(BaseFactory):
    """Factory for generating User test data."""

    __model__ = User

    id = Use(generate_uuid)
    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    hashed_password = Use(lambda: hash_password(DEFAULT_TEST_PASSWORD))
    full_name = "Test User"
    is_active = True
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def inactive(cls, **kwargs):
        """Create an inactive user."""
        return cls.build(is_active=False, **kwargs)
