"""
Users module exceptions.

These exceptions are raised by the users module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
)


class UserNotFoundError(NotFoundError):
    """Raised when no user matches an id or email."""

    def __init__(self, identifier: str):
        super().__init__(
            f"User not found: {identifier}",
            code="USER_NOT_FOUND",
            details={"identifier": identifier},
        )


class AlreadyExistsError(ConflictError):
    """Raised when an email is already used by another account."""

    def __init__(self, email: str):
        super().__init__(
            f"Email already in use: {email}",
            code="USER_ALREADY_EXISTS",
            details={"email": email},
        )


class EmailConflictError(ConflictError):
    """Raised by a user store when a write violates email uniqueness."""

    def __init__(self, email: str):
        super().__init__(
            f"Unique constraint violated for email: {email}",
            code="EMAIL_CONFLICT",
            details={"email": email},
        )


class InvalidParameterError(ValidationError):
    """Raised when an operation's precondition on its arguments fails."""

    def __init__(self, message: str, parameter: str):
        super().__init__(
            message,
            code="INVALID_PARAMETER",
            details={"parameter": parameter},
        )


class UnauthenticatedError(AuthenticationError):
    """Raised when a self-service call has no valid caller."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHENTICATED")


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not match a stored account."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class AccountDisabledError(AuthorizationError):
    """Raised when a disabled account tries to sign in."""

    def __init__(self, user_id: str):
        super().__init__(
            "Account is disabled",
            code="ACCOUNT_DISABLED",
            details={"user_id": user_id},
        )
