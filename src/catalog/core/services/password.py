"""Password hashing with Argon2id."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from src.catalog.runtime.config.config_data import SecurityConfig


class PasswordService:
    """Hash and verify account secrets.

    Plaintext passwords only ever exist in the arguments of these two methods.
    """

    def __init__(self, security_config: SecurityConfig | None = None):
        cfg = security_config or SecurityConfig()
        self._hasher = PasswordHasher(
            time_cost=cfg.password_time_cost,
            memory_cost=cfg.password_memory_cost,
            parallelism=cfg.password_parallelism,
        )

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password_hash: str, password: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (InvalidHashError, VerificationError):
            return False
