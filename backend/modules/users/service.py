"""
User lifecycle service implementation.

Registration, self-service email and password changes, admin management of
any account, and the login credential check. The service holds no state
between calls; every record is read from and written back to the store
within a single operation.
"""

import logging
from typing import Optional
from uuid import UUID

from shared.config import get_settings

from .exceptions import (
    AccountDisabledError,
    AlreadyExistsError,
    EmailConflictError,
    InvalidCredentialsError,
    InvalidParameterError,
    UserNotFoundError,
)
from .hashing import BCRYPT_MAX_BYTES, BcryptPasswordHasher
from .interfaces import IPasswordHasher, IUserRepository, IUserService
from .lookup import UserLookup
from .models import Role, User, UserPublic
from .repository import get_user_repository

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """
    Implementation of the user lifecycle service.

    Email uniqueness is checked up front for a clean error, and enforced
    again by the store on write; a conflict raised by the store (a
    concurrent writer won the race) surfaces as AlreadyExistsError too.
    """

    def __init__(
        self,
        repository: IUserRepository,
        hasher: IPasswordHasher,
        lookup: Optional[UserLookup] = None,
        default_role: Optional[Role] = None,
    ):
        self._repository = repository
        self._hasher = hasher
        self._lookup = lookup or UserLookup(repository)
        self._default_role = default_role or Role(get_settings().default_role)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    async def create(self, email: str, raw_password: str) -> User:
        """Register a new enabled user with the default role."""
        _check_password(raw_password, parameter="password")

        if self._lookup.email_in_use(email):
            logger.debug(f"Registration rejected, email in use: {email}")
            raise AlreadyExistsError(email)

        user = User(
            email=email,
            password_hash=self._hasher.hash(raw_password),
            roles={self._default_role},
            enabled=True,
        )
        try:
            created = self._repository.insert(user)
        except EmailConflictError as e:
            raise AlreadyExistsError(email) from e

        logger.info(f"Created user {created.id}")
        return created

    # -------------------------------------------------------------------------
    # Profile updates
    # -------------------------------------------------------------------------

    async def update(self, new_email: str, caller: Optional[str] = None) -> User:
        """
        Change the caller's own email.

        Setting the email the caller already has is a successful no-op.
        """
        user = self._lookup.find_current(caller)
        if _same_email(user.email, new_email):
            return user

        if self._lookup.email_in_use(new_email):
            raise AlreadyExistsError(new_email)

        user.email = new_email
        user.touch()
        saved = self._save(user)
        logger.info(f"User {saved.id} changed email")
        return saved

    async def admin_update(
        self,
        user_id: UUID,
        new_email: str,
        roles: set[Role],
        enabled: bool,
    ) -> User:
        """
        Update any user's email, roles and enabled flag.

        Roles and enabled are always overwritten with the given values; the
        uniqueness check only runs when the email actually changes.
        """
        user = self._lookup.get(user_id)

        if not _same_email(user.email, new_email):
            if self._lookup.email_in_use(new_email):
                raise AlreadyExistsError(new_email)
            user.email = new_email

        user.roles = set(roles)
        user.enabled = enabled
        user.touch()
        saved = self._save(user)
        logger.info(
            f"Admin updated user {saved.id}: "
            f"roles={sorted(r.value for r in saved.roles)}, enabled={saved.enabled}"
        )
        return saved

    # -------------------------------------------------------------------------
    # Passwords
    # -------------------------------------------------------------------------

    async def change_password(
        self,
        old_raw: str,
        new_raw: str,
        caller: Optional[str] = None,
    ) -> None:
        """Change the caller's password after verifying the current one."""
        # Checked before the caller is resolved, so it fails even without one
        if old_raw == new_raw:
            raise InvalidParameterError(
                "New password must differ from the current password",
                parameter="new_password",
            )
        _check_password(new_raw, parameter="new_password")

        user = self._lookup.find_current(caller)
        if not self._hasher.matches(old_raw, user.password_hash):
            logger.warning(f"Password change rejected for user {user.id}: wrong current password")
            raise InvalidParameterError(
                "Incorrect current password",
                parameter="old_password",
            )

        user.password_hash = self._hasher.hash(new_raw)
        user.touch()
        self._repository.save(user)
        logger.info(f"User {user.id} changed password")

    async def admin_change_password(self, user_id: UUID, new_raw: str) -> None:
        """Set any user's password. The old password is not checked."""
        _check_password(new_raw, parameter="new_password")

        user = self._lookup.get(user_id)
        user.password_hash = self._hasher.hash(new_raw)
        user.touch()
        self._repository.save(user)
        logger.info(f"Admin reset password for user {user.id}")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_all(self) -> list[UserPublic]:
        return [user.to_public() for user in self._repository.find_all()]

    async def get(self, user_id: UUID) -> User:
        return self._lookup.get(user_id)

    async def get_current(self, caller: Optional[str] = None) -> User:
        return self._lookup.find_current(caller)

    async def authenticate(self, email: str, raw_password: str) -> User:
        """
        Check an email/password pair for sign-in.

        Unknown email and wrong password raise the same error so callers
        cannot tell which emails are registered.
        """
        try:
            user = self._lookup.get_by_email(email)
        except UserNotFoundError:
            raise InvalidCredentialsError() from None

        if not self._hasher.matches(raw_password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.enabled:
            raise AccountDisabledError(str(user.id))

        return user

    def _save(self, user: User) -> User:
        try:
            return self._repository.save(user)
        except EmailConflictError as e:
            raise AlreadyExistsError(user.email) from e


def _same_email(current: str, new: str) -> bool:
    return current.strip().lower() == new.strip().lower()


def _check_password(raw: str, parameter: str) -> None:
    """Reject passwords bcrypt cannot hash without losing characters."""
    if not raw:
        raise InvalidParameterError("Password must not be empty", parameter=parameter)
    if len(raw.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise InvalidParameterError(
            f"Password must be at most {BCRYPT_MAX_BYTES} bytes",
            parameter=parameter,
        )


# Module-level instance getter
_service_instance: Optional[UserService] = None


def get_user_service() -> UserService:
    """Get the user service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = UserService(
            repository=get_user_repository(),
            hasher=BcryptPasswordHasher(),
        )
    return _service_instance


def reset_user_service() -> None:
    """Reset the user service singleton (for testing)."""
    global _service_instance
    _service_instance = None
