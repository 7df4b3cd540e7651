"""Product repository for database operations."""

from collections.abc import Sequence

from sqlalchemy import ColumnElement, delete, func, update
from sqlmodel import Session, select

from .entity import Product
from .table import ProductTable


def _history_payload(product: Product) -> list[dict]:
    return [entry.model_dump(mode="json") for entry in product.price_history]


class ProductRepository:
    """Data-access layer for products.

    Methods flush but never commit; transaction boundaries belong to the caller.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, row: ProductTable) -> Product:
        return Product.model_validate(row, from_attributes=True)

    def _to_row(self, product: Product) -> ProductTable:
        return ProductTable(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            price_history=_history_payload(product),
            created_by=product.created_by,
            updated_by=product.updated_by,
            version=product.version,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def create(self, product: Product) -> Product:
        row = self._to_row(product)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def create_many(self, products: Sequence[Product]) -> int:
        self._session.add_all([self._to_row(product) for product in products])
        self._session.flush()
        return len(products)

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id, populate_existing=True)
        if row is None:
            return None
        return self._to_entity(row)

    def exists(self, product_id: str) -> bool:
        statement = select(ProductTable.id).where(ProductTable.id == product_id)
        return self._session.exec(statement).first() is not None

    def update(self, product: Product, expected_version: int) -> bool:
        """Write ``product`` only if the stored version still equals ``expected_version``.

        Returns False when no row matched, either because the product is gone
        or because another writer got there first.
        """
        statement = (
            update(ProductTable)
            .where(ProductTable.id == product.id)
            .where(ProductTable.version == expected_version)
            .values(
                name=product.name,
                description=product.description,
                price=product.price,
                price_history=_history_payload(product),
                updated_by=product.updated_by,
                updated_at=product.updated_at,
                version=product.version,
            )
        )
        result = self._session.connection().execute(statement)
        # Drop identity-map copies loaded before the core-level UPDATE
        self._session.expire_all()
        return result.rowcount == 1

    def delete(self, product_id: str) -> bool:
        statement = delete(ProductTable).where(ProductTable.id == product_id)
        result = self._session.connection().execute(statement)
        self._session.expire_all()
        return result.rowcount > 0

    def delete_all(self) -> int:
        result = self._session.connection().execute(delete(ProductTable))
        self._session.expire_all()
        return result.rowcount

    def count(self, conditions: Sequence[ColumnElement[bool]] = ()) -> int:
        statement = select(func.count()).select_from(ProductTable).where(*conditions)
        return self._session.exec(statement).one()

    def search(
        self,
        conditions: Sequence[ColumnElement[bool]] = (),
        order_by: Sequence[ColumnElement] = (),
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Product]:
        statement = (
            select(ProductTable).where(*conditions).order_by(*order_by).offset(offset)
        )
        if limit is not None:
            statement = statement.limit(limit)
        rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]
