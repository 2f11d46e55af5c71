"""
Users module.

Handles registration, profile and password changes, and admin management
of user accounts.

Public API:
- IUserService: Interface for user lifecycle operations
- IUserRepository / IPasswordHasher: Collaborator interfaces
- User, UserPublic, Role: Data models
- Users exceptions: UserNotFoundError, AlreadyExistsError, etc.
"""

from .interfaces import IUserService, IUserRepository, IPasswordHasher
from .models import User, UserPublic, Role
from .exceptions import (
    UserNotFoundError,
    AlreadyExistsError,
    EmailConflictError,
    InvalidParameterError,
    UnauthenticatedError,
    InvalidCredentialsError,
    AccountDisabledError,
)

__all__ = [
    # Interfaces
    "IUserService",
    "IUserRepository",
    "IPasswordHasher",
    # Models
    "User",
    "UserPublic",
    "Role",
    # Exceptions
    "UserNotFoundError",
    "AlreadyExistsError",
    "EmailConflictError",
    "InvalidParameterError",
    "UnauthenticatedError",
    "InvalidCredentialsError",
    "AccountDisabledError",
]
