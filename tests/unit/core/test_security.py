"""Unit tests for token extraction and the authorization gate."""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from src.catalog.core.exceptions import Forbidden, StorageError, Unauthenticated
from src.catalog.core.security import BearerHeaderExtractor, CookieExtractor
from src.catalog.entities.core.user import User, UserRepository


class TestExtractors:
    """Test individual token extractors."""

    def test_bearer_header(self, request_factory):
        request = request_factory(headers={"Authorization": "Bearer abc.def.ghi"})

        assert BearerHeaderExtractor().extract(request) == "abc.def.ghi"

    def test_bearer_scheme_is_case_insensitive(self, request_factory):
        request = request_factory(headers={"Authorization": "bearer abc.def.ghi"})

        assert BearerHeaderExtractor().extract(request) == "abc.def.ghi"

    @pytest.mark.parametrize("value", ["Basic dXNlcjpwYXNz", "Bearer", "Bearer   ", "abc"])
    def test_bearer_ignores_other_headers(self, request_factory, value):
        request = request_factory(headers={"Authorization": value})

        assert BearerHeaderExtractor().extract(request) is None

    def test_cookie(self, request_factory):
        request = request_factory(cookies={"token": "abc.def.ghi"})

        assert CookieExtractor("token").extract(request) == "abc.def.ghi"
        assert CookieExtractor("session").extract(request) is None


@pytest.fixture
def active_user(session) -> User:
    user = UserRepository(session).create(
        User(username="alice_tester", password_hash="not-a-real-hash")
    )
    session.commit()
    return user


class TestAuthorizationGate:
    """Test request authorization."""

    def test_header_token(self, authorization_gate, jwt_generate_service, request_factory, session, active_user):
        token = jwt_generate_service.issue(active_user.id)
        request = request_factory(headers={"Authorization": f"Bearer {token}"})

        user = authorization_gate.authorize(request, session)

        assert user == active_user
        assert request.state.user == active_user

    def test_cookie_token(self, authorization_gate, jwt_generate_service, request_factory, session, active_user):
        token = jwt_generate_service.issue(active_user.id)
        request = request_factory(cookies={"token": token})

        assert authorization_gate.authorize(request, session) == active_user

    def test_header_takes_precedence_over_cookie(self, authorization_gate, jwt_generate_service, request_factory, session, active_user):
        """A bad header token fails even when the cookie holds a good one."""
        good = jwt_generate_service.issue(active_user.id)
        request = request_factory(
            headers={"Authorization": "Bearer not.a.token"}, cookies={"token": good}
        )

        with pytest.raises(Unauthenticated):
            authorization_gate.authorize(request, session)

    def test_no_token(self, authorization_gate, request_factory, session):
        with pytest.raises(Unauthenticated) as exc_info:
            authorization_gate.authorize(request_factory(), session)

        assert exc_info.value.message == "Not authorized, no token"

    def test_unknown_user(self, authorization_gate, jwt_generate_service, request_factory, session):
        token = jwt_generate_service.issue("00000000-0000-0000-0000-000000000000")
        request = request_factory(headers={"Authorization": f"Bearer {token}"})

        with pytest.raises(Forbidden):
            authorization_gate.authorize(request, session)

    def test_inactive_user(self, authorization_gate, jwt_generate_service, request_factory, session, active_user):
        UserRepository(session).set_active(active_user.id, False)
        session.commit()
        token = jwt_generate_service.issue(active_user.id)
        request = request_factory(headers={"Authorization": f"Bearer {token}"})

        with pytest.raises(Forbidden):
            authorization_gate.authorize(request, session)

    def test_user_lookup_failure_is_storage_error(self, authorization_gate, jwt_generate_service, request_factory, session, active_user, monkeypatch):
        failing = Mock(side_effect=OperationalError("SELECT", {}, Exception("db gone")))
        monkeypatch.setattr(UserRepository, "get", failing)
        token = jwt_generate_service.issue(active_user.id)
        request = request_factory(headers={"Authorization": f"Bearer {token}"})

        with pytest.raises(StorageError):
            authorization_gate.authorize(request, session)

        assert not hasattr(request.state, "user")
