"""Product API router. Every route requires an authenticated caller."""

from fastapi import APIRouter, Depends, Query, status

from src.catalog.api.http.deps import (
    get_app_config,
    get_current_user,
    get_product_ledger,
)
from src.catalog.core.models import (
    ClearProductsResponse,
    GenerateProductsResponse,
    MessageResponse,
    ProductCreate,
    ProductEnvelope,
    ProductPage,
    ProductUpdate,
)
from src.catalog.core.services import ProductLedgerService, ProductListQuery
from src.catalog.entities.core.user import User
from src.catalog.entities.service.product import Product
from src.catalog.runtime.config.config_data import ConfigData

router = APIRouter(prefix="/products", tags=["products"])

# Sample-data routes, only mounted when dev routes are enabled
dev_router = APIRouter(prefix="/products/test", tags=["products-dev"])


@router.post("", response_model=ProductEnvelope, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    user: User = Depends(get_current_user),
    ledger: ProductLedgerService = Depends(get_product_ledger),
) -> ProductEnvelope:
    """Create a new product."""
    product = ledger.create(body, actor=user.username)
    return ProductEnvelope(message="Product created successfully", product=product)


@router.get("", response_model=ProductPage)
def list_products(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    id: str | None = Query(None),
    name: str | None = Query(None),
    description: str | None = Query(None),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    user: User = Depends(get_current_user),
    ledger: ProductLedgerService = Depends(get_product_ledger),
    config: ConfigData = Depends(get_app_config),
) -> ProductPage:
    """List products with filtering, sorting and pagination."""
    query = ProductListQuery.from_params(
        {
            "page": page,
            "limit": limit,
            "id": id,
            "name": name,
            "description": description,
            "minPrice": min_price,
            "maxPrice": max_price,
            "sortBy": sort_by,
            "sortOrder": sort_order,
        },
        config.pagination,
    )
    return ledger.list(query)


@router.get("/{product_id}", response_model=Product)
def get_product(
    product_id: str,
    user: User = Depends(get_current_user),
    ledger: ProductLedgerService = Depends(get_product_ledger),
) -> Product:
    """Get a product by ID."""
    return ledger.get(product_id)


@router.patch("/{product_id}", response_model=ProductEnvelope)
def update_product(
    product_id: str,
    body: ProductUpdate | None = None,
    user: User = Depends(get_current_user),
    ledger: ProductLedgerService = Depends(get_product_ledger),
) -> ProductEnvelope:
    """Update some fields of a product. A price change is appended to its history."""
    product = ledger.update(product_id, body or ProductUpdate(), actor=user.username)
    return ProductEnvelope(message="Product updated successfully", product=product)


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    user: User = Depends(get_current_user),
    ledger: ProductLedgerService = Depends(get_product_ledger),
) -> MessageResponse:
    """Delete a product."""
    ledger.delete(product_id)
    return MessageResponse(message="Product deleted successfully")


@dev_router.post(
    "/generate",
    response_model=GenerateProductsResponse,
    status_code=status.HTTP_201_CREATED,
)
def generate_products(
    count: int = Query(30, ge=1, le=500),
    user: User = Depends(get_current_user),
    ledger: ProductLedgerService = Depends(get_product_ledger),
) -> GenerateProductsResponse:
    created = ledger.generate_samples(count, actor=user.username)
    return GenerateProductsResponse(
        message=f"{created} random products created successfully", count=created
    )


@dev_router.delete("/clear", response_model=ClearProductsResponse)
def clear_products(
    user: User = Depends(get_current_user),
    ledger: ProductLedgerService = Depends(get_product_ledger),
) -> ClearProductsResponse:
    deleted = ledger.clear()
    return ClearProductsResponse(
        message="All products removed successfully", deleted_count=deleted
    )
