"""
User lookup helper.

Resolves users by id or email and resolves the current caller, so the
service never repeats the "find or raise" dance.
"""

import logging
from typing import Optional, Union
from uuid import UUID

from shared.context import get_current_principal_identity

from .exceptions import UserNotFoundError, UnauthenticatedError
from .interfaces import IUserRepository
from .models import User

logger = logging.getLogger(__name__)


class UserLookup:
    """Read-side helper over an IUserRepository."""

    def __init__(self, repository: IUserRepository):
        self._repository = repository

    def get(self, user_id: UUID) -> User:
        """
        Get a user by id.

        Raises:
            UserNotFoundError: If no user has the id
        """
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    def get_by_email(self, email: str) -> User:
        """
        Get a user by email (case-insensitive).

        Raises:
            UserNotFoundError: If no user has the email
        """
        user = self._repository.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        return user

    def resolve(self, identifier: Union[UUID, str]) -> User:
        """
        Get a user by id or email.

        A UUID, or a string that parses as one, is looked up as an id;
        anything else as an email.
        """
        if isinstance(identifier, UUID):
            return self.get(identifier)
        try:
            user_id = UUID(identifier)
        except ValueError:
            return self.get_by_email(identifier)
        return self.get(user_id)

    def email_in_use(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        """
        Check whether any stored user has the email.

        Args:
            email: Email to check
            exclude_id: User to ignore, typically the one being updated
        """
        user = self._repository.find_by_email(email)
        if user is None:
            return False
        return exclude_id is None or user.id != exclude_id

    def find_current(self, caller: Optional[str] = None) -> User:
        """
        Resolve the calling user.

        Args:
            caller: Caller email. Falls back to the request's caller context.

        Raises:
            UnauthenticatedError: If there is no caller or it no longer
                resolves to a stored user
        """
        identity = caller if caller is not None else get_current_principal_identity()
        if not identity:
            raise UnauthenticatedError()

        user = self._repository.find_by_email(identity)
        if user is None:
            logger.warning(f"Caller no longer exists: {identity}")
            raise UnauthenticatedError("Authenticated user no longer exists")
        return user
