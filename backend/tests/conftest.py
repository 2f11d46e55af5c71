"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from uuid import UUID

from shared.config import get_settings
from shared.context import clear_current_principal
from modules.users.models import Role, User
from modules.users.repository import InMemoryUserRepository, reset_user_repository
from modules.users.service import UserService, reset_user_service


TEST_USER_ID = UUID("befa7c20-20ae-42dd-ad1f-b061cce7ad85")


class FakePasswordHasher:
    """Reversible stand-in for bcrypt so tests stay fast and predictable."""

    PREFIX = "hashed::"

    def hash(self, raw: str) -> str:
        return f"{self.PREFIX}{raw}"

    def matches(self, raw: str, hashed: str) -> bool:
        return hashed == f"{self.PREFIX}{raw}"


def make_user(
    email: str = "user@headon.nl",
    password: str = "p",
    user_id: UUID = TEST_USER_ID,
    roles: set[Role] | None = None,
    enabled: bool = True,
) -> User:
    """Build a user whose password hash matches FakePasswordHasher."""
    return User(
        id=user_id,
        email=email,
        password_hash=FakePasswordHasher().hash(password),
        roles=roles if roles is not None else {Role.USER},
        enabled=enabled,
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, singletons and caller context around each test."""
    get_settings.cache_clear()
    reset_user_repository()
    reset_user_service()
    clear_current_principal()
    yield
    get_settings.cache_clear()
    reset_user_repository()
    reset_user_service()
    clear_current_principal()


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Provide an empty in-memory user store."""
    return InMemoryUserRepository()


@pytest.fixture
def hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def service(repository, hasher) -> UserService:
    """Create a user service over the in-memory store and fake hasher."""
    return UserService(repository=repository, hasher=hasher, default_role=Role.USER)


@pytest.fixture
def user_factory():
    """Provide make_user() to tests (conftest is not importable by name)."""
    return make_user


@pytest.fixture
def existing_user(repository) -> User:
    """Store a user with email user@headon.nl and password 'p'."""
    return repository.insert(make_user())
