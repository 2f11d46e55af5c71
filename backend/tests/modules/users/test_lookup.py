"""Tests for the user lookup helper."""

import pytest
from uuid import uuid4

from shared.context import authenticated_as
from modules.users.exceptions import UnauthenticatedError, UserNotFoundError
from modules.users.lookup import UserLookup


@pytest.fixture
def lookup(repository):
    return UserLookup(repository)


class TestGet:
    def test_get_by_id(self, lookup, existing_user):
        assert lookup.get(existing_user.id).email == existing_user.email

    def test_get_by_id_not_found(self, lookup):
        with pytest.raises(UserNotFoundError):
            lookup.get(uuid4())

    def test_get_by_email(self, lookup, existing_user):
        assert lookup.get_by_email("User@Headon.nl").id == existing_user.id

    def test_get_by_email_not_found(self, lookup):
        with pytest.raises(UserNotFoundError) as exc_info:
            lookup.get_by_email("missing@headon.nl")
        assert exc_info.value.details == {"identifier": "missing@headon.nl"}


class TestResolve:
    def test_resolve_uuid(self, lookup, existing_user):
        assert lookup.resolve(existing_user.id).id == existing_user.id

    def test_resolve_uuid_string(self, lookup, existing_user):
        """A string that parses as a UUID should be treated as an id."""
        assert lookup.resolve(str(existing_user.id)).id == existing_user.id

    def test_resolve_email(self, lookup, existing_user):
        assert lookup.resolve("user@headon.nl").id == existing_user.id

    def test_resolve_unknown(self, lookup):
        with pytest.raises(UserNotFoundError):
            lookup.resolve("nobody@headon.nl")


class TestEmailInUse:
    def test_email_in_use(self, lookup, existing_user):
        assert lookup.email_in_use("user@headon.nl") is True

    def test_email_in_use_case_insensitive(self, lookup, existing_user):
        assert lookup.email_in_use("USER@HEADON.NL") is True

    def test_email_not_in_use(self, lookup, existing_user):
        assert lookup.email_in_use("other@headon.nl") is False

    def test_email_in_use_excludes_given_user(self, lookup, existing_user):
        """The user being updated should not collide with itself."""
        assert lookup.email_in_use("user@headon.nl", exclude_id=existing_user.id) is False

    def test_email_in_use_excludes_only_given_user(self, lookup, existing_user):
        assert lookup.email_in_use("user@headon.nl", exclude_id=uuid4()) is True


class TestFindCurrent:
    def test_find_current_explicit_caller(self, lookup, existing_user):
        assert lookup.find_current("user@headon.nl").id == existing_user.id

    def test_find_current_from_context(self, lookup, existing_user):
        with authenticated_as("user@headon.nl"):
            assert lookup.find_current().id == existing_user.id

    def test_explicit_caller_wins_over_context(self, lookup, existing_user):
        with authenticated_as("someone-else@headon.nl"):
            assert lookup.find_current("user@headon.nl").id == existing_user.id

    def test_find_current_no_caller(self, lookup, existing_user):
        with pytest.raises(UnauthenticatedError):
            lookup.find_current()

    def test_find_current_empty_caller(self, lookup, existing_user):
        with pytest.raises(UnauthenticatedError):
            lookup.find_current("")

    def test_find_current_caller_removed(self, lookup, repository, existing_user):
        """A caller that no longer exists is unauthenticated, not not-found."""
        repository.clear()
        with pytest.raises(UnauthenticatedError):
            lookup.find_current("user@headon.nl")
