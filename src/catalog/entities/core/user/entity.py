"""User domain entity."""

from typing import Any

from pydantic import Field

from src.catalog.entities.core._base import Entity


class User(Entity):
    """A registered account allowed to manage the catalog.

    The password hash travels with the entity so the credential store can
    verify secrets, but it is excluded from every serialization.
    """

    username: str = Field(description="Unique login name, immutable once set")
    password_hash: str = Field(exclude=True, repr=False)
    is_active: bool = Field(default=True, description="Inactive users are refused")

    def __eq__(self, other: Any) -> bool:
        """Compare users by identity attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.username == other.username
            and self.is_active == other.is_active
        )

    def __hash__(self) -> int:
        return hash((self.id, self.username))
