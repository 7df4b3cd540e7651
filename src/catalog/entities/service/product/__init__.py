"""Entity package: Product."""

from .entity import PriceHistoryEntry, Product
from .repository import ProductRepository
from .table import ProductTable

__all__ = ["PriceHistoryEntry", "Product", "ProductRepository", "ProductTable"]
