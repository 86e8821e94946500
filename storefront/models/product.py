# storefront/models/product.py
import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import SQLModel, Field


class Category(str, Enum):
    ELECTRONICS = "Electronics"
    ACCESSORIES = "Accessories"
    OFFICE = "Office"
    CLOTHING = "Clothing"
    HOME = "Home"
    BOOKS = "Books"
    SPORTS = "Sports"
    OTHER = "Other"


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    Invariants (enforced by the repositories, not by this row class):
      - stock >= 0
      - price >= 0
    Products are never hard-deleted.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=100,
        index=True,
        description="Display name of the product",
    )

    description: str = Field(
        max_length=500,
        description="Short description shown on the product page",
    )

    price: float = Field(
        ge=0,
        index=True,
        description="Unit price",
    )

    image: str = Field(description="Image URL")

    category: str = Field(
        index=True,
        description="One of Category values",
    )

    stock: int = Field(
        default=0,
        ge=0,
        description="How many sellable units are available",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
