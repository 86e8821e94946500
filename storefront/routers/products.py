# storefront/routers/products.py
from typing import get_args

from fastapi import APIRouter, Depends, Query, status

from storefront.core.auth import require_admin
from storefront.core.config import Settings
from storefront.dependencies import get_app_settings, get_catalog_service
from storefront.schemas.common import ApiResponse, ListResponse
from storefront.schemas.product import (
    ProductCreate,
    ProductFilter,
    ProductRead,
    ProductSort,
    StockAdjustment,
)
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["Products"])

SORT_KEYS = set(get_args(ProductSort))


def _clamp_limit(limit: int, settings: Settings) -> int:
    return max(1, min(limit, settings.PRODUCT_LIST_MAX_LIMIT))


# -------- Public endpoints --------


@router.get("", response_model=ListResponse[ProductRead], response_model_exclude_none=True)
def list_products(
    category: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    limit: int = Query(default=50),
    service: CatalogService = Depends(get_catalog_service),
    settings: Settings = Depends(get_app_settings),
):
    """
    List products.

    - `category`: exact category name
    - `search`: case-insensitive match on name or description
    - `sort`: price-low | price-high | name | newest (default; unknown keys fall back to it)
    """
    criteria = ProductFilter(
        category=category or None,
        search=search or None,
        sort=sort if sort in SORT_KEYS else "newest",
        limit=_clamp_limit(limit, settings),
    )
    products = service.list_products(criteria)
    return ListResponse[ProductRead](
        count=len(products),
        data=[ProductRead.model_validate(p) for p in products],
    )


@router.get(
    "/category/{category}",
    response_model=ListResponse[ProductRead],
    response_model_exclude_none=True,
)
def list_products_in_category(
    category: str,
    service: CatalogService = Depends(get_catalog_service),
    settings: Settings = Depends(get_app_settings),
):
    """Products whose category contains `category` (case-insensitive)."""
    products = service.list_by_category(category, settings.PRODUCT_LIST_MAX_LIMIT)
    return ListResponse[ProductRead](
        count=len(products),
        data=[ProductRead.model_validate(p) for p in products],
    )


@router.get("/{product_id}", response_model=ApiResponse[ProductRead], response_model_exclude_none=True)
def get_product(
    product_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    """Get a single product by id. Malformed ids are reported as 404."""
    product = service.get_product(product_id)
    return ApiResponse[ProductRead](data=ProductRead.model_validate(product))


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=ApiResponse[ProductRead],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    payload: ProductCreate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Create a new product (admin only)."""
    product = service.create_product(payload)
    return ApiResponse[ProductRead](
        data=ProductRead.model_validate(product),
        message="Product created successfully",
    )


@router.post(
    "/{product_id}/stock",
    response_model=ApiResponse[ProductRead],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
def adjust_stock(
    product_id: str,
    payload: StockAdjustment,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Increase or decrease stock (admin only).

    A decrease larger than the current stock is rejected with 400.
    """
    product = service.adjust_stock(product_id, payload)
    return ApiResponse[ProductRead](
        data=ProductRead.model_validate(product),
        message="Stock updated successfully",
    )
