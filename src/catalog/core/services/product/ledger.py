"""Product ledger: every write to a product goes through here.

The ledger owns the price history. Callers hand it validated payloads and the
caller's identity tag; it decides which fields may change, appends history
entries, and commits. Persistence failures come out as ``StorageError`` with
the cause logged, never shown.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from src.catalog.core.exceptions import (
    ConcurrentUpdate,
    InvalidIdentifier,
    NoFieldsProvided,
    NotFound,
    ValidationError,
)
from src.catalog.core.models.product import ProductCreate, ProductPage, ProductUpdate
from src.catalog.core.services.database.db_session import storage_guard
from src.catalog.core.services.product.history import next_price_entry
from src.catalog.core.services.product.query import (
    ProductListQuery,
    build_conditions,
    build_order,
    total_pages,
)
from src.catalog.core.services.product.samples import random_products
from src.catalog.entities.core._base import normalize_identifier, utcnow
from src.catalog.entities.service.product import Product, ProductRepository

UNKNOWN_ACTOR = "Unknown"

# Never writable through update, in either spelling
PROTECTED_FIELDS = frozenset(
    {
        "id",
        "_id",
        "created_by",
        "createdBy",
        "updated_by",
        "updatedBy",
        "price_history",
        "priceHistory",
        "created_at",
        "createdAt",
        "updated_at",
        "updatedAt",
        "version",
    }
)


def strip_protected(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if key not in PROTECTED_FIELDS}


def parse_identifier(product_id: str) -> str:
    """Canonical product id.

    Raises:
        InvalidIdentifier: the id is not a well-formed UUID
    """
    identifier = normalize_identifier(product_id)
    if identifier is None:
        raise InvalidIdentifier()
    return identifier


class ProductLedgerService:
    def __init__(
        self,
        db_session: Session,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._db_session = db_session
        self._repo = ProductRepository(db_session)
        self._clock = clock

    def _storage_guard(self, operation: str, message: str | None = None):
        return storage_guard(self._db_session, f"Product {operation}", message)

    def create(self, payload: ProductCreate, actor: str | None = None) -> Product:
        """Persist a new product with its first history entry."""
        actor = actor or UNKNOWN_ACTOR
        now = self._clock()
        product = Product(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            price_history=[next_price_entry([], payload.price, actor, now)],
            created_by=actor,
            updated_by=actor,
            created_at=now,
            updated_at=now,
        )
        with self._storage_guard("create"):
            created = self._repo.create(product)
            self._db_session.commit()

        logger.info("Product created", product_id=created.id, actor=actor)
        return created

    def get(self, product_id: str) -> Product:
        product_id = parse_identifier(product_id)
        with self._storage_guard("read"):
            product = self._repo.get(product_id)
        if product is None:
            raise NotFound()
        return product

    def update(
        self,
        product_id: str,
        changes: ProductUpdate | Mapping[str, Any],
        actor: str | None = None,
    ) -> Product:
        """Apply a partial update.

        ``changes`` may be a validated ``ProductUpdate`` or a raw mapping; raw
        mappings lose their protected keys and are then validated.

        Raises:
            ValidationError: a raw mapping fails validation
            InvalidIdentifier: malformed id
            NotFound: no product with that id
            NoFieldsProvided: nothing editable was supplied
            ConcurrentUpdate: the product changed since it was read
        """
        payload = self._coerce_update(changes)
        product_id = parse_identifier(product_id)
        actor = actor or UNKNOWN_ACTOR

        with self._storage_guard("update"):
            current = self._repo.get(product_id)
            if current is None:
                raise NotFound()

            fields = strip_protected(payload.changes())
            if not fields:
                raise NoFieldsProvided()

            now = self._clock()
            history = list(current.price_history)
            entry = next_price_entry(history, fields.get("price"), actor, now)
            if entry is not None:
                history.append(entry)

            updated = current.model_copy(
                update={
                    **fields,
                    "price_history": history,
                    "updated_by": actor,
                    "updated_at": now,
                    "version": current.version + 1,
                }
            )
            if not self._repo.update(updated, expected_version=current.version):
                if self._repo.exists(product_id):
                    raise ConcurrentUpdate()
                raise NotFound()
            self._db_session.commit()

        logger.info(
            "Product updated",
            product_id=product_id,
            actor=actor,
            fields=sorted(fields),
            history_appended=entry is not None,
        )
        return updated

    def delete(self, product_id: str) -> None:
        product_id = parse_identifier(product_id)
        with self._storage_guard("delete"):
            if not self._repo.delete(product_id):
                raise NotFound()
            self._db_session.commit()
        logger.info("Product deleted", product_id=product_id)

    def list(self, query: ProductListQuery) -> ProductPage:
        conditions = build_conditions(query)
        with self._storage_guard("list"):
            total = self._repo.count(conditions)
            # Pages past the end never reach the store; their offset may not fit an INTEGER
            products = []
            if query.offset < total:
                products = self._repo.search(
                    conditions,
                    order_by=build_order(query),
                    offset=query.offset,
                    limit=query.limit,
                )
        return ProductPage(
            page=query.page,
            limit=query.limit,
            total=total,
            total_pages=total_pages(total, query.limit),
            products=products,
        )

    def generate_samples(
        self, count: int, actor: str | None = None, rng: random.Random | None = None
    ) -> int:
        """Insert ``count`` random products in one transaction."""
        actor = actor or UNKNOWN_ACTOR
        products = random_products(count, actor, self._clock(), rng)
        with self._storage_guard("generate", "Server error while generating products"):
            created = self._repo.create_many(products)
            self._db_session.commit()
        logger.info("Generated sample products", count=created, actor=actor)
        return created

    def clear(self) -> int:
        """Remove every product. Returns the number removed."""
        with self._storage_guard("clear", "Server error while removing products"):
            deleted = self._repo.delete_all()
            self._db_session.commit()
        logger.warning("Removed all products", count=deleted)
        return deleted

    @staticmethod
    def _coerce_update(changes: ProductUpdate | Mapping[str, Any]) -> ProductUpdate:
        if isinstance(changes, ProductUpdate):
            return changes
        try:
            return ProductUpdate.model_validate(strip_protected(changes))
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc.errors()) from exc
