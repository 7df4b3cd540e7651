import time
from collections.abc import Callable

from authlib.common.security import generate_token
from authlib.jose import JoseError, JsonWebToken

from src.catalog.core.services.jwt.jwt_utils import resolve_signing_secret
from src.catalog.runtime.config.config_data import JWTConfig


class JwtGeneratorService:
    """Service for issuing access tokens."""

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

    @property
    def ttl_seconds(self) -> int:
        return self._config.access_token_ttl_seconds

    def issue(self, user_id: str, expires_in_seconds: int | None = None) -> str:
        """Issue a signed access token naming ``user_id`` as its subject.

        Args:
            user_id: Identifier of the user the token is bound to
            expires_in_seconds: Lifetime override (defaults to the configured 7 days)

        Returns:
            Compact serialized JWT
        """
        now = int(self._clock())
        lifetime = (
            self._config.access_token_ttl_seconds
            if expires_in_seconds is None
            else expires_in_seconds
        )
        payload = {
            "iss": self._config.issuer,
            "sub": user_id,
            "iat": now,
            "exp": now + lifetime,
            "jti": generate_token(16),
        }
        header = {"alg": self._config.algorithm, "typ": "JWT"}

        try:
            token = self._jwt.encode(header, payload, self._secret)
        except JoseError as e:
            raise RuntimeError(f"JWT encoding failed: {e}") from e

        # authlib returns bytes, decode to string
        return token.decode() if isinstance(token, bytes) else token
