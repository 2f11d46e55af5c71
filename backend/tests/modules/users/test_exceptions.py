"""Tests for users module exceptions."""

import pytest

from shared.exceptions import (
    AccountsError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
)
from modules.users.exceptions import (
    UserNotFoundError,
    AlreadyExistsError,
    EmailConflictError,
    InvalidParameterError,
    UnauthenticatedError,
    InvalidCredentialsError,
    AccountDisabledError,
)


class TestUserNotFoundError:
    def test_inherits_not_found(self):
        error = UserNotFoundError("user@headon.nl")
        assert isinstance(error, NotFoundError)
        assert isinstance(error, AccountsError)

    def test_code_and_details(self):
        error = UserNotFoundError("user@headon.nl")
        assert error.code == "USER_NOT_FOUND"
        assert error.details == {"identifier": "user@headon.nl"}
        assert "user@headon.nl" in error.message


class TestAlreadyExistsError:
    def test_inherits_conflict(self):
        assert isinstance(AlreadyExistsError("a@headon.nl"), ConflictError)

    def test_to_dict(self):
        result = AlreadyExistsError("a@headon.nl").to_dict()
        assert result["error"] == "USER_ALREADY_EXISTS"
        assert result["details"]["email"] == "a@headon.nl"


class TestEmailConflictError:
    def test_is_distinct_from_already_exists(self):
        """Store conflicts are a separate type the service translates."""
        error = EmailConflictError("a@headon.nl")
        assert isinstance(error, ConflictError)
        assert not isinstance(error, AlreadyExistsError)
        assert error.code == "EMAIL_CONFLICT"


class TestInvalidParameterError:
    def test_inherits_validation(self):
        error = InvalidParameterError("Incorrect current password", parameter="old_password")
        assert isinstance(error, ValidationError)
        assert error.code == "INVALID_PARAMETER"
        assert error.details == {"parameter": "old_password"}
        assert str(error) == "Incorrect current password"


class TestAuthErrors:
    def test_unauthenticated(self):
        error = UnauthenticatedError()
        assert isinstance(error, AuthenticationError)
        assert error.code == "UNAUTHENTICATED"
        assert error.message == "Authentication required"

    def test_invalid_credentials(self):
        error = InvalidCredentialsError()
        assert isinstance(error, AuthenticationError)
        assert error.code == "INVALID_CREDENTIALS"

    def test_account_disabled(self):
        error = AccountDisabledError("user-123")
        assert isinstance(error, AuthorizationError)
        assert error.details == {"user_id": "user-123"}


@pytest.mark.parametrize(
    "error, status_code",
    [
        (UserNotFoundError("user@headon.nl"), 404),
        (AlreadyExistsError("a@headon.nl"), 409),
        (EmailConflictError("a@headon.nl"), 409),
        (InvalidParameterError("Incorrect current password", parameter="old_password"), 400),
        (UnauthenticatedError(), 401),
        (InvalidCredentialsError(), 401),
        (AccountDisabledError("user-123"), 403),
    ],
)
def test_user_errors_map_to_http_status(error, status_code):
    assert error.status_code == status_code
