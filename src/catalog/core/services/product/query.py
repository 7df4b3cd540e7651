"""Parsing and translation of product listing parameters.

Query strings arrive as raw text. ``ProductListQuery.from_params`` turns them
into a validated query object (or raises before the store is touched), and the
helpers below turn that object into SQL conditions and ordering.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict
from sqlalchemy import ColumnElement
from sqlmodel import col

from src.catalog.core.exceptions import InvalidIdentifier, InvalidQuery
from src.catalog.entities.core._base import normalize_identifier
from src.catalog.entities.service.product import ProductTable
from src.catalog.runtime.config.config_data import PaginationConfig

SortField = Literal["name", "price", "createdAt", "description"]
SortOrder = Literal["asc", "desc"]

SORT_COLUMNS = {
    "name": ProductTable.name,
    "price": ProductTable.price,
    "createdAt": ProductTable.created_at,
    "description": ProductTable.description,
}


def _clean(params: Mapping[str, str | None], key: str) -> str | None:
    # Blank values behave as if the parameter was not sent
    value = params.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_positive_int(name: str, raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidQuery(f"'{name}' must be a positive integer") from None
    if value < 1:
        raise InvalidQuery(f"'{name}' must be a positive integer")
    return value


def _parse_price(name: str, raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise InvalidQuery(f"'{name}' must be a number") from None
    if not math.isfinite(value):
        raise InvalidQuery(f"'{name}' must be a number")
    return value


class ProductListQuery(BaseModel):
    """A validated product listing request."""

    model_config = ConfigDict(frozen=True)

    page: int = 1
    limit: int = 10
    id: str | None = None
    name: str | None = None
    description: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, str | None],
        pagination: PaginationConfig | None = None,
    ) -> ProductListQuery:
        """Validate raw query-string values.

        Raises:
            InvalidQuery: bad page, limit, price bound, sort field or sort order
            InvalidIdentifier: ``id`` is present but malformed
        """
        pagination = pagination or PaginationConfig()

        page = _parse_positive_int("page", _clean(params, "page"), 1)
        limit = _parse_positive_int(
            "limit", _clean(params, "limit"), pagination.default_limit
        )
        if limit > pagination.max_limit:
            raise InvalidQuery(f"'limit' must not exceed {pagination.max_limit}")

        sort_by = _clean(params, "sortBy") or "createdAt"
        if sort_by not in get_args(SortField):
            raise InvalidQuery(
                "'sortBy' must be one of: " + ", ".join(get_args(SortField))
            )
        sort_order = _clean(params, "sortOrder") or "desc"
        if sort_order not in get_args(SortOrder):
            raise InvalidQuery("'sortOrder' must be 'asc' or 'desc'")

        product_id = _clean(params, "id")
        if product_id is not None:
            product_id = normalize_identifier(product_id)
            if product_id is None:
                raise InvalidIdentifier()

        return cls(
            page=page,
            limit=limit,
            id=product_id,
            name=_clean(params, "name"),
            description=_clean(params, "description"),
            min_price=_parse_price("minPrice", _clean(params, "minPrice")),
            max_price=_parse_price("maxPrice", _clean(params, "maxPrice")),
            sort_by=sort_by,
            sort_order=sort_order,
        )


def build_conditions(query: ProductListQuery) -> list[ColumnElement[bool]]:
    """AND-combined filters; text filters are case-insensitive substring matches."""
    conditions: list[ColumnElement[bool]] = []
    if query.id is not None:
        conditions.append(col(ProductTable.id) == query.id)
    if query.name is not None:
        conditions.append(col(ProductTable.name).icontains(query.name, autoescape=True))
    if query.description is not None:
        conditions.append(
            col(ProductTable.description).icontains(query.description, autoescape=True)
        )
    if query.min_price is not None:
        conditions.append(col(ProductTable.price) >= query.min_price)
    if query.max_price is not None:
        conditions.append(col(ProductTable.price) <= query.max_price)
    return conditions


def build_order(query: ProductListQuery) -> list[ColumnElement]:
    column = col(SORT_COLUMNS[query.sort_by])
    tiebreaker = col(ProductTable.id)
    if query.sort_order == "asc":
        return [column.asc(), tiebreaker.asc()]
    return [column.desc(), tiebreaker.desc()]


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0
