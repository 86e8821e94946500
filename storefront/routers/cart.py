# storefront/routers/cart.py
from fastapi import APIRouter, Depends, Response, status

from storefront.core.errors import ValidationFailure
from storefront.core.session import CartSession, get_cart_session
from storefront.dependencies import get_cart_service
from storefront.models.cart import CartItem
from storefront.models.product import Product
from storefront.schemas.cart import (
    CartItemCreate,
    CartItemRead,
    CartItemUpdate,
    CartResponse,
    CartSummary,
)
from storefront.schemas.common import ApiResponse, MessageResponse
from storefront.schemas.product import ProductRead
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])


def _cart_line(item: CartItem, product: Product | None) -> CartItemRead:
    line = CartItemRead.model_validate(item)
    if product is not None:
        line.product = ProductRead.model_validate(product)
    return line


@router.get("", response_model=CartResponse)
def get_cart(
    cart_session: CartSession = Depends(get_cart_session),
    service: CartService = Depends(get_cart_service),
):
    """
    Get the session's cart with `total` (snapshot price x quantity) and
    `itemCount` (sum of quantities), both computed on every read. Each line
    carries the live `product` (null once the product is gone).
    """
    session_id = cart_session.resolve()
    cart = service.get_cart(session_id)
    return CartResponse(
        session_id=session_id,
        count=len(cart.items),
        data=[_cart_line(it, cart.products.get(it.product_id)) for it in cart.items],
        summary=CartSummary(total=cart.total, item_count=cart.item_count),
    )


@router.post("", response_model=ApiResponse[CartItemRead], response_model_exclude_none=True)
def add_to_cart(
    payload: CartItemCreate,
    response: Response,
    cart_session: CartSession = Depends(get_cart_session),
    service: CartService = Depends(get_cart_service),
):
    """
    Add a product to the session's cart.

    201 when a new line was created, 200 when an existing line was incremented.
    """
    if not payload.product_id:
        raise ValidationFailure("Product ID is required")

    session_id = cart_session.resolve(payload.session_id)
    item, created = service.add_item(session_id, payload.product_id, payload.quantity)

    if created:
        response.status_code = status.HTTP_201_CREATED
        message = "Item added to cart successfully"
    else:
        message = "Cart updated successfully"
    return ApiResponse[CartItemRead](
        data=CartItemRead.model_validate(item), message=message
    )


@router.put("/{item_id}", response_model=ApiResponse[CartItemRead], response_model_exclude_none=True)
def update_cart_item(
    item_id: str,
    payload: CartItemUpdate,
    cart_session: CartSession = Depends(get_cart_session),
    service: CartService = Depends(get_cart_service),
):
    """
    Set a line's quantity. quantity=0 removes the line.
    """
    session_id = cart_session.resolve(payload.session_id)
    service.get_item(session_id, item_id)

    item = service.set_quantity(session_id, item_id, payload.quantity)
    if item is None:
        return ApiResponse[CartItemRead](message="Item removed from cart")
    return ApiResponse[CartItemRead](
        data=CartItemRead.model_validate(item),
        message="Cart item updated successfully",
    )


@router.delete("/{item_id}", response_model=MessageResponse)
def remove_cart_item(
    item_id: str,
    cart_session: CartSession = Depends(get_cart_session),
    service: CartService = Depends(get_cart_service),
):
    """Remove one line from the session's cart."""
    service.remove_item(cart_session.resolve(), item_id)
    return MessageResponse(message="Item removed from cart successfully")


@router.delete("", response_model=MessageResponse)
def clear_cart(
    cart_session: CartSession = Depends(get_cart_session),
    service: CartService = Depends(get_cart_service),
):
    """Remove every line of the session's cart."""
    service.clear_cart(cart_session.resolve())
    return MessageResponse(message="Cart cleared successfully")
