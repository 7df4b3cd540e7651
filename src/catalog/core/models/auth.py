"""Credential payloads, account views and verified token claims."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from src.catalog.core.models.base import ApiModel
from src.catalog.entities.core.user import User

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=6)]


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Username
    password: Annotated[str, StringConstraints(min_length=8)]


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Username
    password: Annotated[str, StringConstraints(min_length=1)]


class UserPublic(ApiModel):
    """The parts of an account that are safe to return to clients."""

    id: str
    username: str
    is_active: bool = True

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(id=user.id, username=user.username, is_active=user.is_active)


class AuthResponse(ApiModel):
    message: str
    user: UserPublic
    token: str


class MessageResponse(ApiModel):
    message: str


class TokenClaims(BaseModel):
    """Verified claims of an access token."""

    subject: str = Field(description="Identifier of the user the token was issued to")
    issuer: str
    issued_at: datetime
    expires_at: datetime
    jti: str | None = None
