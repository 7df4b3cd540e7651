from typing import Final

from loguru import logger

from src.catalog.core.exceptions import Unauthenticated
from src.catalog.runtime.config.config_data import JWTConfig

# ---------------- tunables ----------------
MAX_JWT_CHARS: Final = 4096
_ALLOWED: Final = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_."
)  # no '='

DEV_FALLBACK_SECRET: Final = "dev-secret-key"


def resolve_signing_secret(jwt_config: JWTConfig, environment: str) -> str:
    """Return the configured secret, or a fixed development secret outside production."""
    if jwt_config.secret:
        return jwt_config.secret
    if environment == "production":
        raise RuntimeError("JWT signing secret not configured")
    logger.warning("jwt.secret not configured; using the development fallback secret")
    return DEV_FALLBACK_SECRET


def prefilter_compact_jwt(token: str) -> None:
    """Reject tokens that cannot be a compact JWS before any decoding work."""
    if not token or len(token) > MAX_JWT_CHARS:
        raise Unauthenticated("Not authorized, token failed")
    dots = 0
    for ch in token:
        if ch not in _ALLOWED:
            raise Unauthenticated("Not authorized, token failed")
        if ch == ".":
            dots += 1
    segments = token.split(".")
    if dots != 2 or not all(segments):
        raise Unauthenticated("Not authorized, token failed")
