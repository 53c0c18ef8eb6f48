"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from api.dependencies import reset_container
from shared.config import Settings
from shared.models import Role
from modules.auth.service import AuthService

from tests.fakes import FakeDatabase, FakeUserRepository


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

TEST_USER_ID = "6f1c2a3e-8b4d-4c1f-9a2e-1d3b5c7e9f01"
ADMIN_USER_ID = "0a9b8c7d-6e5f-4a3b-8c2d-1e0f9a8b7c6d"
SUPERADMIN_USER_ID = "5e4d3c2b-1a09-4f8e-9d7c-6b5a49382716"


def create_test_token(
    user_id: str = TEST_USER_ID,
    token_type: str = "access",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: Identity ID to include as ``sub``
        token_type: ``access`` or ``refresh``
        expired: If True, creates an expired token
        secret: Signing secret (pass another value to forge a bad signature)

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "type": token_type,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_header(user_id: str = TEST_USER_ID) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_test_token(user_id=user_id)}"}


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(jwt_secret=TEST_JWT_SECRET, _env_file=None)


@pytest.fixture
def fake_db() -> FakeDatabase:
    """In-memory datastore shared by the fake repositories of one test."""
    return FakeDatabase()


@pytest.fixture
def user_repo(fake_db: FakeDatabase) -> FakeUserRepository:
    return FakeUserRepository(fake_db)


@pytest.fixture
def auth_service(user_repo: FakeUserRepository, test_settings: Settings) -> AuthService:
    return AuthService(users=user_repo, settings=test_settings)


@pytest.fixture
def test_user(fake_db: FakeDatabase):
    """A regular user stored in the fake datastore."""
    return fake_db.add_user(TEST_USER_ID, name="Test User", email="test@example.com")


@pytest.fixture
def admin_user(fake_db: FakeDatabase):
    return fake_db.add_user(ADMIN_USER_ID, name="Admin", email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def superadmin_user(fake_db: FakeDatabase):
    return fake_db.add_user(
        SUPERADMIN_USER_ID, name="Super", email="super@example.com", role=Role.SUPERADMIN
    )


@pytest.fixture
def auth_token(test_user) -> str:
    """Create a valid access token for ``test_user``."""
    return create_test_token(user_id=test_user.id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
