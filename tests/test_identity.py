"""Tests for IdentityStore."""

import pytest

from eduplatform.errors import AuthenticationError, ValidationError
from eduplatform.schemas import Account, Role


class TestSignup:

    def test_signup_logs_in(self, platform):
        account = platform.identity.signup("Sam@Example.com ", "pw", "Sam", "student")
        assert type(account) is Account
        assert account.email == "sam@example.com"
        assert account.role == Role.STUDENT
        assert platform.identity.get_current_user() == account

    def test_password_not_exposed(self, platform):
        account = platform.identity.signup("sam@example.com", "pw", "Sam", Role.STUDENT)
        assert set(account.model_dump()) == {"id", "email", "name", "role"}
        stored = platform.identity.accounts.get(account.id)
        assert stored.password_hash != "pw"

    def test_duplicate_email(self, platform, student):
        with pytest.raises(ValidationError) as exc:
            platform.identity.signup("sam@example.com", "other", "Sammy", Role.STUDENT)
        assert exc.value.message == "User already exists"

    def test_unknown_role(self, platform):
        with pytest.raises(ValidationError):
            platform.identity.signup("x@example.com", "pw", "X", "admin")

    def test_missing_fields(self, platform):
        with pytest.raises(ValidationError):
            platform.identity.signup("", "pw", "X", Role.STUDENT)


class TestLogin:

    def test_login_and_logout(self, platform, student):
        assert platform.identity.get_current_user() is None
        assert platform.identity.login("sam@example.com", "secret") == student
        assert platform.identity.get_current_user() == student
        platform.identity.logout()
        assert platform.identity.get_current_user() is None

    def test_wrong_password(self, platform, student):
        with pytest.raises(AuthenticationError):
            platform.identity.login("sam@example.com", "wrong")
        assert platform.identity.get_current_user() is None

    def test_unknown_email(self, platform):
        with pytest.raises(AuthenticationError):
            platform.identity.login("nobody@example.com", "pw")


class TestRequireRole:

    def test_matching_role(self, platform, educator):
        platform.identity.login("ada@example.com", "lovelace")
        assert platform.identity.require_role(Role.EDUCATOR) == educator

    def test_wrong_role(self, platform, student):
        platform.identity.login("sam@example.com", "secret")
        with pytest.raises(AuthenticationError):
            platform.identity.require_role("educator")

    def test_logged_out(self, platform):
        with pytest.raises(AuthenticationError) as exc:
            platform.identity.require_role(Role.STUDENT)
        assert exc.value.kind == "unauthenticated"
