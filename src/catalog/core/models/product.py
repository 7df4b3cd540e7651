"""Product payloads accepted and returned by the product endpoints.

Unknown keys in request bodies are dropped during validation, which is how
caller-supplied identifiers, audit tags, timestamps and history never reach
the ledger.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from src.catalog.core.models.base import ApiModel
from src.catalog.entities.service.product import Product

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=5)]
Price = Annotated[float, Field(ge=0, allow_inf_nan=False)]


def _reject_booleans(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("Price must be a number")
    return value


class ProductCreate(BaseModel):
    """Body of ``POST /products``: every field is required."""

    model_config = ConfigDict(extra="ignore")

    name: Name
    description: Description
    price: Price

    @field_validator("price", mode="before")
    @classmethod
    def _price_is_numeric(cls, value: Any) -> Any:
        return _reject_booleans(value)


class ProductUpdate(BaseModel):
    """Body of ``PATCH /products/{id}``: any subset of the editable fields."""

    model_config = ConfigDict(extra="ignore")

    name: Name | None = None
    description: Description | None = None
    price: Price | None = None

    @field_validator("name", "description", "price", mode="before")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        # Validators only run for keys the caller actually sent
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _price_is_numeric(cls, value: Any) -> Any:
        return _reject_booleans(value)

    def changes(self) -> dict[str, Any]:
        """Fields the caller explicitly provided."""
        return self.model_dump(exclude_unset=True)


class ProductEnvelope(ApiModel):
    message: str
    product: Product


class ProductPage(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int
    products: list[Product]


class GenerateProductsResponse(ApiModel):
    message: str
    count: int


class ClearProductsResponse(ApiModel):
    message: str
    deleted_count: int
