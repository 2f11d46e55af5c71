"""
Users module interfaces.

Other modules should depend on IUserService, not the concrete implementation.
The service in turn depends on IUserRepository and IPasswordHasher, so both
collaborators can be swapped (Supabase or in-memory store, real or fake
hasher) without touching business rules.
"""

from typing import Protocol, Optional, runtime_checkable
from uuid import UUID

from .models import Role, User, UserPublic


@runtime_checkable
class IPasswordHasher(Protocol):
    """One-way password hashing and verification."""

    def hash(self, raw: str) -> str:
        """Return an opaque hash of the raw password."""
        ...

    def matches(self, raw: str, hashed: str) -> bool:
        """Return True if the raw password produces the stored hash."""
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """
    Persistence of user records.

    Implementations must enforce email uniqueness atomically: insert() and
    save() raise EmailConflictError instead of writing a duplicate email.
    """

    def find_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        ...

    def insert(self, user: User) -> User:
        """Persist a new user. Raises EmailConflictError on duplicate email."""
        ...

    def save(self, user: User) -> User:
        """Persist changes to an existing user. Raises EmailConflictError on duplicate email."""
        ...

    def find_all(self) -> list[User]:
        ...


@runtime_checkable
class IUserService(Protocol):
    """
    Interface for user lifecycle operations.

    Self-service operations act on the caller, given explicitly as an email
    or taken from the request's caller context when omitted. Admin operations
    act on an arbitrary target id.
    """

    async def create(self, email: str, raw_password: str) -> User:
        """
        Register a new user with the default role.

        Raises:
            AlreadyExistsError: If the email is already in use
            InvalidParameterError: If the password is empty
        """
        ...

    async def update(self, new_email: str, caller: Optional[str] = None) -> User:
        """
        Change the caller's own email.

        Raises:
            UnauthenticatedError: If there is no valid caller
            AlreadyExistsError: If another user has the email
        """
        ...

    async def admin_update(
        self,
        user_id: UUID,
        new_email: str,
        roles: set[Role],
        enabled: bool,
    ) -> User:
        """
        Overwrite a user's email, roles and enabled flag.

        Raises:
            UserNotFoundError: If no user has the id
            AlreadyExistsError: If another user has the email
        """
        ...

    async def change_password(
        self,
        old_raw: str,
        new_raw: str,
        caller: Optional[str] = None,
    ) -> None:
        """
        Change the caller's password after verifying the current one.

        Raises:
            InvalidParameterError: If the passwords are equal or the current
                password is wrong
            UnauthenticatedError: If there is no valid caller
        """
        ...

    async def admin_change_password(self, user_id: UUID, new_raw: str) -> None:
        """
        Set a user's password without verifying the old one.

        Raises:
            UserNotFoundError: If no user has the id
        """
        ...

    async def get_all(self) -> list[UserPublic]:
        """List every stored user without credentials."""
        ...

    async def get(self, user_id: UUID) -> User:
        ...

    async def get_current(self, caller: Optional[str] = None) -> User:
        ...

    async def authenticate(self, email: str, raw_password: str) -> User:
        """
        Check a login attempt.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
            AccountDisabledError: If the account is disabled
        """
        ...
