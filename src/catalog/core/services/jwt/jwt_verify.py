"""JWT verification service."""

import time
from collections.abc import Callable
from datetime import UTC, datetime

from authlib.jose import JoseError, JsonWebToken
from authlib.jose.errors import ExpiredTokenError
from loguru import logger

from src.catalog.core.exceptions import Unauthenticated
from src.catalog.core.models.auth import TokenClaims
from src.catalog.core.services.jwt.jwt_utils import (
    prefilter_compact_jwt,
    resolve_signing_secret,
)
from src.catalog.runtime.config.config_data import JWTConfig


class JwtVerificationService:
    def __init__(
        self,
        jwt_config: JWTConfig,
        environment: str = "development",
        clock: Callable[[], float] = time.time,
    ):
        self._config = jwt_config
        self._secret = resolve_signing_secret(jwt_config, environment)
        self._jwt = JsonWebToken([jwt_config.algorithm])
        self._clock = clock
        self._claims_options = {
            "iss": {"essential": True, "value": jwt_config.issuer},
            "sub": {"essential": True},
            "exp": {"essential": True},
            "iat": {"essential": True},
        }

    def verify(self, token: str) -> TokenClaims:
        """Verify signature, issuer and expiry of an access token.

        Raises:
            Unauthenticated: malformed, badly signed or expired tokens
        """
        prefilter_compact_jwt(token)

        try:
            claims = self._jwt.decode(
                token, self._secret, claims_options=self._claims_options
            )
            claims.validate(now=int(self._clock()), leeway=self._config.clock_skew)
        except ExpiredTokenError as exc:
            raise Unauthenticated("Token expired") from exc
        except (JoseError, ValueError, TypeError) as exc:
            logger.debug("JWT rejected: {}", type(exc).__name__)
            raise Unauthenticated("Not authorized, token failed") from exc

        return TokenClaims(
            subject=str(claims["sub"]),
            issuer=claims["iss"],
            issued_at=datetime.fromtimestamp(int(claims["iat"]), UTC),
            expires_at=datetime.fromtimestamp(int(claims["exp"]), UTC),
            jti=claims.get("jti"),
        )
