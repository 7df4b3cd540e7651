"""Unit tests for password hashing and account operations."""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from src.catalog.core.exceptions import (
    Conflict,
    Forbidden,
    NotFound,
    StorageError,
    Unauthenticated,
)
from src.catalog.entities.core.user import UserRepository


class TestPasswordService:
    """Test argon2 hashing."""

    def test_hash_and_verify(self, password_service):
        password_hash = password_service.hash("correct-horse")

        assert password_hash.startswith("$argon2")
        assert "correct-horse" not in password_hash
        assert password_service.verify(password_hash, "correct-horse") is True
        assert password_service.verify(password_hash, "wrong-horse") is False

    def test_salted(self, password_service):
        assert password_service.hash("same-password") != password_service.hash(
            "same-password"
        )

    def test_garbage_hash_does_not_verify(self, password_service):
        assert password_service.verify("not-a-hash", "anything") is False


class TestUserManagementService:
    """Test registration and login."""

    def test_register(self, user_management_service, jwt_verify_service, session):
        user, token = user_management_service.register("alice_tester", "correct-horse")

        stored = UserRepository(session).get_by_username("alice_tester")
        assert stored is not None
        assert stored.id == user.id
        assert stored.password_hash != "correct-horse"
        assert jwt_verify_service.verify(token).subject == user.id

    def test_duplicate_username(self, user_management_service):
        user_management_service.register("alice_tester", "correct-horse")

        with pytest.raises(Conflict) as exc_info:
            user_management_service.register("alice_tester", "another-horse")

        assert exc_info.value.message == "User already exists"

    def test_authenticate(self, user_management_service):
        registered, _ = user_management_service.register("alice_tester", "correct-horse")

        user, token = user_management_service.authenticate("alice_tester", "correct-horse")

        assert user.id == registered.id
        assert token

    @pytest.mark.parametrize(
        ("username", "password"),
        [("alice_tester", "wrong-horse"), ("nobody_here", "correct-horse")],
    )
    def test_bad_credentials_look_identical(self, user_management_service, username, password):
        user_management_service.register("alice_tester", "correct-horse")

        with pytest.raises(Unauthenticated) as exc_info:
            user_management_service.authenticate(username, password)

        assert exc_info.value.message == "Invalid credentials"

    def test_inactive_user_cannot_log_in(self, user_management_service):
        user_management_service.register("alice_tester", "correct-horse")
        user_management_service.deactivate("alice_tester")

        with pytest.raises(Forbidden):
            user_management_service.authenticate("alice_tester", "correct-horse")

    def test_deactivate_unknown_user(self, user_management_service):
        with pytest.raises(NotFound):
            user_management_service.deactivate("nobody_here")

    def test_password_hash_is_never_serialized(self, user_management_service):
        user, _ = user_management_service.register("alice_tester", "correct-horse")

        assert "password_hash" not in user.model_dump()
        assert "passwordHash" not in user.model_dump(by_alias=True)
        assert user.password_hash not in repr(user)

    def test_store_failure_is_opaque(self, user_management_service, monkeypatch):
        failing = Mock(side_effect=OperationalError("SELECT", {}, Exception("db gone")))
        monkeypatch.setattr(
            user_management_service._user_repo, "get_by_username", failing
        )

        with pytest.raises(StorageError) as exc_info:
            user_management_service.authenticate("alice_tester", "correct-horse")

        assert exc_info.value.message == "Server error"
