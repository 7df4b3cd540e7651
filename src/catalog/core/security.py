"""Request authorization for product operations.

A token is looked up by an ordered list of extractors (header before cookie),
verified, and resolved to an active user. Nothing here writes to the store.
"""

from collections.abc import Sequence
from typing import Protocol

from fastapi import Request
from loguru import logger
from sqlmodel import Session

from src.catalog.core.exceptions import Forbidden, Unauthenticated
from src.catalog.core.services.database.db_session import storage_guard
from src.catalog.core.services.jwt.jwt_verify import JwtVerificationService
from src.catalog.entities.core.user import User, UserRepository


class TokenExtractor(Protocol):
    """Finds a raw access token on a request, or returns None."""

    name: str

    def extract(self, request: Request) -> str | None: ...


class BearerHeaderExtractor:
    name = "bearer"

    def extract(self, request: Request) -> str | None:
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return None
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer":
            return None
        return token.strip() or None


class CookieExtractor:
    name = "cookie"

    def __init__(self, cookie_name: str = "token"):
        self.cookie_name = cookie_name

    def extract(self, request: Request) -> str | None:
        return request.cookies.get(self.cookie_name) or None


def default_extractors(cookie_name: str = "token") -> list[TokenExtractor]:
    return [BearerHeaderExtractor(), CookieExtractor(cookie_name)]


class AuthorizationGate:
    def __init__(
        self,
        extractors: Sequence[TokenExtractor],
        verifier: JwtVerificationService,
    ):
        self._extractors = list(extractors)
        self._verifier = verifier

    def find_token(self, request: Request) -> str | None:
        """First token yielded by the extractors, in order."""
        for extractor in self._extractors:
            token = extractor.extract(request)
            if token:
                logger.debug("Access token found", source=extractor.name)
                return token
        return None

    def authorize(self, request: Request, db_session: Session) -> User:
        """Resolve the caller of ``request`` and attach it as ``request.state.user``.

        Raises:
            Unauthenticated: no token, or the token is malformed, forged or expired
            Forbidden: the token names a user that is missing or inactive
            StorageError: the user lookup failed
        """
        token = self.find_token(request)
        if token is None:
            raise Unauthenticated("Not authorized, no token")

        claims = self._verifier.verify(token)

        with storage_guard(db_session, "User lookup"):
            user = UserRepository(db_session).get(claims.subject)
        if user is None or not user.is_active:
            logger.info("Rejected token for unknown or inactive user")
            raise Forbidden("User not found or inactive")

        request.state.user = user
        return user
