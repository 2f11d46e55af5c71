"""
User repositories.

Two implementations of IUserRepository:
- SupabaseUserRepository: the `users` table, whose unique index on email
  makes uniqueness atomic at the database.
- InMemoryUserRepository: a dict guarded by a lock, for tests and local runs.

Both raise EmailConflictError when a write would duplicate an email. Neither
performs authorization checks; that is the service layer's job.
"""

import logging
import threading
from typing import Optional, Any
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from shared.config import get_settings
from shared.database import get_supabase_client
from shared.exceptions import ExternalServiceError
from shared.repository import BaseRepository

from .exceptions import EmailConflictError, UserNotFoundError
from .interfaces import IUserRepository
from .models import Role, User

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class SupabaseUserRepository(BaseRepository[User]):
    """
    Repository for user records in Supabase.

    All methods return User models mapped from database rows.
    """

    def __init__(self, db: Client, table: str = "users") -> None:
        super().__init__(db, table)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_by_id(self, user_id: UUID) -> Optional[User]:
        result = self._execute(self._query().select("*").eq("id", str(user_id)))
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def find_by_email(self, email: str) -> Optional[User]:
        result = self._execute(
            self._query().select("*").eq("email", _normalize_email(email))
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def find_all(self) -> list[User]:
        result = self._execute(self._query().select("*").order("created_at"))
        return [self._map_to_user(row) for row in result.data]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, user: User) -> User:
        """
        Insert a new user row.

        Raises:
            EmailConflictError: If the email's unique index rejects the row.
        """
        result = self._execute(
            self._query().insert(self._map_to_row(user)),
            email=user.email,
        )
        return self._map_to_user(result.data[0])

    def save(self, user: User) -> User:
        """
        Write all mutable fields of an existing user.

        Raises:
            EmailConflictError: If the new email is taken by another row.
            UserNotFoundError: If no row has the user's id.
        """
        data = self._map_to_row(user)
        del data["id"]
        del data["created_at"]
        result = self._execute(
            self._query().update(data).eq("id", str(user.id)),
            email=user.email,
        )
        if not result.data:
            raise UserNotFoundError(str(user.id))
        return self._map_to_user(result.data[0])

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _execute(self, query, email: Optional[str] = None):
        """Run a query, translating PostgREST errors to module errors."""
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION and email is not None:
                raise EmailConflictError(email) from e
            error = ExternalServiceError(
                f"User store request failed: {e.message}",
                service="supabase",
                details={"code": e.code, "table": self._table},
            )
            logger.error(f"Supabase request failed: {error.to_dict()}")
            raise error from e

    def _map_to_row(self, user: User) -> dict[str, Any]:
        """Map User model to database row."""
        return {
            "id": str(user.id),
            "email": user.email,
            "password_hash": user.password_hash,
            "roles": sorted(role.value for role in user.roles),
            "enabled": user.enabled,
            "created_at": user.created_at.isoformat(),
            "updated_at": user.updated_at.isoformat(),
        }

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=UUID(str(data["id"])),
            email=data["email"],
            password_hash=data["password_hash"],
            roles={Role(r) for r in data.get("roles") or []},
            enabled=data.get("enabled", True),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )


class InMemoryUserRepository:
    """
    In-memory implementation of IUserRepository.

    Records are copied on the way in and out, so callers never hold a
    reference into the store. A lock makes each uniqueness check and its
    write one atomic step.
    """

    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}
        self._lock = threading.Lock()

    def find_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy(deep=True) if user else None

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user = self._find_by_email(_normalize_email(email))
            return user.model_copy(deep=True) if user else None

    def find_all(self) -> list[User]:
        with self._lock:
            return [user.model_copy(deep=True) for user in self._users.values()]

    def insert(self, user: User) -> User:
        with self._lock:
            if self._find_by_email(user.email) is not None:
                raise EmailConflictError(user.email)
            self._users[user.id] = user.model_copy(deep=True)
            return user.model_copy(deep=True)

    def save(self, user: User) -> User:
        with self._lock:
            if user.id not in self._users:
                raise UserNotFoundError(str(user.id))
            owner = self._find_by_email(user.email)
            if owner is not None and owner.id != user.id:
                raise EmailConflictError(user.email)
            self._users[user.id] = user.model_copy(deep=True)
            return user.model_copy(deep=True)

    def clear(self) -> None:
        """Remove all users (for test cleanup)."""
        with self._lock:
            self._users.clear()

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def _find_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None


def create_user_repository() -> IUserRepository:
    """
    Create the user repository selected by settings.user_repository.

    Returns:
        InMemoryUserRepository for "memory", SupabaseUserRepository for "supabase"
    """
    settings = get_settings()
    if settings.user_repository == "supabase":
        return SupabaseUserRepository(get_supabase_client(), settings.users_table)
    return InMemoryUserRepository()


# Module-level instance getter
_repository_instance: Optional[IUserRepository] = None


def get_user_repository() -> IUserRepository:
    """Get the user repository singleton."""
    global _repository_instance
    if _repository_instance is None:
        _repository_instance = create_user_repository()
    return _repository_instance


def reset_user_repository() -> None:
    """Reset the user repository singleton (for testing)."""
    global _repository_instance
    _repository_instance = None
