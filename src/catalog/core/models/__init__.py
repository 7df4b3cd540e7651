"""Typed request and response models exchanged at the HTTP boundary."""

from .auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenClaims,
    UserPublic,
)
from .product import (
    ClearProductsResponse,
    GenerateProductsResponse,
    ProductCreate,
    ProductEnvelope,
    ProductPage,
    ProductUpdate,
)

__all__ = [
    "AuthResponse",
    "ClearProductsResponse",
    "GenerateProductsResponse",
    "LoginRequest",
    "MessageResponse",
    "ProductCreate",
    "ProductEnvelope",
    "ProductPage",
    "ProductUpdate",
    "RegisterRequest",
    "TokenClaims",
    "UserPublic",
]
