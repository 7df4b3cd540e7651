"""Entity: Product."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.catalog.entities.core._base import Entity, as_utc, utcnow


class PriceHistoryEntry(BaseModel):
    """One immutable item of a product's price ledger."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    price: float = Field(ge=0, description="Price in effect from changed_at on")
    changed_by: str = Field(description="Identity tag of whoever set this price")
    changed_at: datetime = Field(default_factory=utcnow)

    @field_validator("changed_at", mode="after")
    @classmethod
    def _normalize_changed_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class Product(Entity):
    """A catalog product together with the full history of its price.

    ``price_history`` is ordered oldest first and only ever grows; the
    ledger service is the only writer.
    """

    name: str
    description: str
    price: float = Field(ge=0)
    price_history: list[PriceHistoryEntry] = Field(default_factory=list)
    created_by: str
    updated_by: str
    version: int = Field(default=1, ge=1)

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.price == other.price
            and self.price_history == other.price_history
            and self.version == other.version
        )

    def __hash__(self) -> int:
        return hash((self.id, self.version))
