"""Product database table model."""

from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field

from src.catalog.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    The price history is embedded in the row as a JSON array so a product and
    its ledger are always written in a single statement.
    """

    __tablename__ = "products"

    name: str = Field(nullable=False, index=True)
    description: str = Field(nullable=False)
    price: float = Field(nullable=False, index=True)
    price_history: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    created_by: str = Field(nullable=False)
    updated_by: str = Field(nullable=False)
    version: int = Field(default=1, nullable=False)
