"""Core services exports."""

# Database Services
from .database import DbManageService, DbSessionService

# JWT Services
from .jwt import JwtGeneratorService, JwtVerificationService

# Credential Services
from .password import PasswordService

# Product Services
from .product import ProductLedgerService, ProductListQuery

# User Services
from .user import UserManagementService

__all__ = [
    # Database Services
    "DbManageService",
    "DbSessionService",
    # JWT Services
    "JwtGeneratorService",
    "JwtVerificationService",
    # Credential Services
    "PasswordService",
    # Product Services
    "ProductLedgerService",
    "ProductListQuery",
    # User Services
    "UserManagementService",
]
