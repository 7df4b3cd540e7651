"""Entities organized by business concept rather than technical layer.

Each entity package contains:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .core.user import User, UserRepository, UserTable
from .service.product import PriceHistoryEntry, Product, ProductRepository, ProductTable

__all__ = [
    "PriceHistoryEntry",
    "Product",
    "ProductRepository",
    "ProductTable",
    "User",
    "UserRepository",
    "UserTable",
]
