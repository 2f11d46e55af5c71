"""
Shared infrastructure for the Accounts backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- context: Request-scoped caller identity
- logging_config: Logging setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .context import (
    authenticated_as,
    get_current_principal_identity,
    set_current_principal,
    reset_current_principal,
)
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    AccountsError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .logging_config import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "authenticated_as",
    "get_current_principal_identity",
    "set_current_principal",
    "reset_current_principal",
    "get_supabase_client",
    "reset_client_cache",
    "AccountsError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "configure_logging",
]
