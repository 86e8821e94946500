# storefront/schemas/cart.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import Field, computed_field, field_serializer

from storefront.schemas.common import CamelModel
from storefront.schemas.product import ProductRead


class CartItemCreate(CamelModel):
    """
    Payload for POST /cart.

    product_id is optional at the schema level so that a missing id
    gets the dedicated "Product ID is required" message.
    """

    product_id: str | None = None
    quantity: int = Field(default=1, ge=1)
    session_id: str | None = None


class CartItemUpdate(CamelModel):
    """
    Payload for PUT /cart/{id}. quantity=0 removes the line.
    """

    quantity: int = Field(ge=0)
    session_id: str | None = None


class CartItemRead(CamelModel):
    id: uuid.UUID
    session_id: str
    product_id: uuid.UUID
    name: str
    price: float
    image: str
    quantity: int
    created_at: datetime
    updated_at: datetime
    # live catalog product, filled in by GET /cart only
    product: ProductRead | None = None

    @computed_field(alias="totalPrice")
    @property
    def total_price(self) -> float:
        return round(self.price * self.quantity, 2)


class CartSummary(CamelModel):
    total: Decimal
    item_count: int

    @field_serializer("total")
    def serialize_total(self, total: Decimal) -> str:
        return f"{total:.2f}"


class CartResponse(CamelModel):
    """Envelope for GET /cart."""

    success: bool = True
    session_id: str
    count: int
    data: list[CartItemRead]
    summary: CartSummary
