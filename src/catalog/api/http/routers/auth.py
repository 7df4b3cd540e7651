"""Account endpoints: register, login, logout and the current user."""

from fastapi import APIRouter, Depends, Response, status

from src.catalog.api.http.deps import (
    get_app_config,
    get_current_user,
    get_user_management_service,
)
from src.catalog.core.models import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserPublic,
)
from src.catalog.core.services import UserManagementService
from src.catalog.entities.core.user import User
from src.catalog.runtime.config.config_data import ConfigData

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_token_cookie(response: Response, token: str, config: ConfigData) -> None:
    response.set_cookie(
        key=config.security.token_cookie_name,
        value=token,
        max_age=config.jwt.access_token_ttl_seconds,
        httponly=True,
        secure=config.security.secure_cookies
        and config.app.environment == "production",
        samesite=config.security.cookie_samesite,
        path="/",
    )


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
def register(
    body: RegisterRequest,
    response: Response,
    users: UserManagementService = Depends(get_user_management_service),
    config: ConfigData = Depends(get_app_config),
) -> AuthResponse:
    """Create an account and sign it in."""
    user, token = users.register(body.username, body.password)
    _set_token_cookie(response, token, config)
    return AuthResponse(
        message="User registered successfully",
        user=UserPublic.from_user(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    users: UserManagementService = Depends(get_user_management_service),
    config: ConfigData = Depends(get_app_config),
) -> AuthResponse:
    user, token = users.authenticate(body.username, body.password)
    _set_token_cookie(response, token, config)
    return AuthResponse(
        message="Login successful", user=UserPublic.from_user(user), token=token
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response, config: ConfigData = Depends(get_app_config)
) -> MessageResponse:
    response.delete_cookie(config.security.token_cookie_name, path="/")
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserPublic)
def get_me(user: User = Depends(get_current_user)) -> UserPublic:
    """The account the presented token belongs to."""
    return UserPublic.from_user(user)
