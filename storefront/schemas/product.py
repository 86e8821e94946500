# storefront/schemas/product.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import Field, computed_field, field_validator

from storefront.models.product import Category
from storefront.schemas.common import CamelModel

ProductSort = Literal["price-low", "price-high", "name", "newest"]


class ProductCreate(CamelModel):
    """
    Payload for creating a product (admin only).
    """

    name: str = Field(max_length=100)
    description: str = Field(max_length=500)
    price: float = Field(ge=0)
    image: str
    category: Category
    stock: int = Field(default=0, ge=0)

    @field_validator("name", "description", "image")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class ProductRead(CamelModel):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    name: str
    description: str
    price: float
    image: str
    category: str
    stock: int
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="inStock")
    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class StockAdjustment(CamelModel):
    """
    Admin payload for POST /products/{id}/stock.
    """

    operation: Literal["increase", "decrease"]
    amount: int = Field(ge=1)


class ProductFilter(CamelModel):
    """
    Search criteria understood by every product repository.

    - category: exact match
    - search: case-insensitive substring of name or description
    - category_contains: case-insensitive substring of category
    """

    category: str | None = None
    category_contains: str | None = None
    search: str | None = None
    sort: ProductSort = "newest"
    limit: int = 50
