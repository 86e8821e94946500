# storefront/models/cart.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class CartItem(SQLModel, table=True):
    """
    One line of a session's cart.

    A session cannot have 2 rows for the same product, and a row never
    holds quantity 0 (the row is deleted instead).

    name / price / image are snapshots taken when the product was first
    added; later catalog changes do not touch them.
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("session_id", "product_id", name="uq_cart_session_product"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    session_id: str = Field(index=True)

    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
    )

    name: str
    price: float = Field(ge=0, description="Snapshot price at add time")
    image: str

    quantity: int = Field(
        gt=0,
        description="Must be >= 1",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
