"""Unit tests for access token issuance and verification."""

import time

import pytest
from authlib.jose import jwt

from src.catalog.core.exceptions import Unauthenticated
from src.catalog.core.services import JwtGeneratorService, JwtVerificationService
from src.catalog.runtime.config.config_data import JWTConfig


class TestJwtRoundTrip:
    """Test tokens issued by the generator against the verifier."""

    def test_issue_and_verify(self, jwt_generate_service, jwt_verify_service):
        token = jwt_generate_service.issue("user-123")

        claims = jwt_verify_service.verify(token)

        assert claims.subject == "user-123"
        assert claims.issuer == "product-catalog-test"
        assert claims.jti

    def test_default_lifetime_is_seven_days(self, jwt_generate_service, jwt_verify_service):
        claims = jwt_verify_service.verify(jwt_generate_service.issue("user-123"))

        assert (claims.expires_at - claims.issued_at).total_seconds() == 7 * 24 * 3600

    def test_expired_token(self, test_config, jwt_verify_service):
        issued_long_ago = JwtGeneratorService(
            test_config.jwt, clock=lambda: time.time() - 8 * 24 * 3600
        )
        token = issued_long_ago.issue("user-123")

        with pytest.raises(Unauthenticated) as exc_info:
            jwt_verify_service.verify(token)

        assert exc_info.value.message == "Token expired"

    def test_wrong_secret(self, jwt_verify_service):
        forged = JwtGeneratorService(
            JWTConfig(secret="not-the-secret", issuer="product-catalog-test")
        ).issue("user-123")

        with pytest.raises(Unauthenticated) as exc_info:
            jwt_verify_service.verify(forged)

        assert exc_info.value.message != "Token expired"

    def test_wrong_issuer(self, jwt_secret, jwt_verify_service):
        token = JwtGeneratorService(
            JWTConfig(secret=jwt_secret, issuer="someone-else")
        ).issue("user-123")

        with pytest.raises(Unauthenticated):
            jwt_verify_service.verify(token)

    def test_missing_subject(self, jwt_secret, jwt_verify_service):
        now = int(time.time())
        token = jwt.encode(
            {"alg": "HS256"},
            {"iss": "product-catalog-test", "iat": now, "exp": now + 60},
            jwt_secret,
        ).decode()

        with pytest.raises(Unauthenticated):
            jwt_verify_service.verify(token)

    def test_unsigned_token_rejected(self, jwt_verify_service):
        token = "eyJhbGciOiJub25lIn0.eyJzdWIiOiJ1c2VyLTEyMyJ9.c2ln"

        with pytest.raises(Unauthenticated):
            jwt_verify_service.verify(token)

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "a..c", "a b.c.d"])
    def test_malformed_tokens(self, jwt_verify_service, token):
        with pytest.raises(Unauthenticated):
            jwt_verify_service.verify(token)


class TestSigningSecret:
    """Test signing secret resolution."""

    def test_development_fallback(self):
        token = JwtGeneratorService(JWTConfig(), "development").issue("user-123")

        claims = JwtVerificationService(JWTConfig(), "development").verify(token)
        assert claims.subject == "user-123"

    def test_production_requires_secret(self):
        with pytest.raises(RuntimeError):
            JwtGeneratorService(JWTConfig(), "production")
