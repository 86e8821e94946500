# storefront/services/cart_service.py
import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from storefront.core.errors import Conflict, InsufficientStock, NotFound, ValidationFailure
from storefront.models.cart import CartItem
from storefront.models.product import Product
from storefront.repositories.base import (
    CartRepository,
    DuplicateLineItem,
    ProductRepository,
    StockExceeded,
)
from storefront.services.catalog_service import parse_id

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# How many times add_item re-reads the cart when a concurrent request
# created or removed the same line in between.
MAX_ADD_ATTEMPTS = 3


@dataclass
class CartView:
    """A session's cart with aggregates computed at read time."""

    items: list[CartItem]
    total: Decimal
    item_count: int
    # live catalog rows by id; a product deleted since the add is absent
    products: dict[uuid.UUID, Product] = field(default_factory=dict)


def cart_total(items: list[CartItem]) -> Decimal:
    """Sum of snapshot price x quantity, rounded to cents."""
    total = sum(
        (Decimal(str(it.price)) * it.quantity for it in items),
        Decimal("0"),
    )
    return total.quantize(CENT)


class CartService:
    """
    Business logic for session carts.

    Rules:
      - at most one line item per (session, product)
      - quantity >= 1 while a line exists; setting 0 deletes it
      - every add/update re-checks the product's current stock, and the
        check + write is a single conditional repository call
      - name/price/image are snapshotted when the line is created;
        later catalog price changes never reach an existing line
      - stock is only read here, never reserved or decremented
    """

    def __init__(self, carts: CartRepository, products: ProductRepository):
        self.carts = carts
        self.products = products

    # ---- internal helpers ----

    def _get_product(self, product_id: str | uuid.UUID):
        product = self.products.get_by_id(parse_id(product_id, "Product not found"))
        if product is None:
            raise NotFound("Product not found")
        return product

    def _find_owned(self, session_id: str, item_id: uuid.UUID) -> CartItem | None:
        item = self.carts.get_by_id(item_id)
        if item is None or item.session_id != session_id:
            return None
        return item

    # ---- public operations ----

    def get_item(self, session_id: str, item_id: str | uuid.UUID) -> CartItem:
        """
        Resolve a line item of this session.

        Raises:
            NotFound: malformed id, missing item, or an item of another session.
        """
        item = self._find_owned(session_id, parse_id(item_id, "Cart item not found"))
        if item is None:
            raise NotFound("Cart item not found")
        return item

    def get_cart(self, session_id: str) -> CartView:
        items = self.carts.list_for_session(session_id)
        products = {}
        for it in items:
            product = self.products.get_by_id(it.product_id)
            if product is not None:
                products[product.id] = product
        return CartView(
            items=items,
            total=cart_total(items),
            item_count=sum(it.quantity for it in items),
            products=products,
        )

    def add_item(
        self,
        session_id: str,
        product_id: str | uuid.UUID,
        quantity: int = 1,
    ) -> tuple[CartItem, bool]:
        """
        Add `quantity` units of a product to the session's cart.

        A new line snapshots the product's current name/price/image; an
        existing line is incremented. The resulting quantity must not
        exceed the product's stock, otherwise nothing is written.

        Returns:
            (line item, created) where created is True for a new line.

        Raises:
            ValidationFailure: quantity < 1
            NotFound: product does not exist
            InsufficientStock: resulting quantity > stock
        """
        if quantity < 1:
            raise ValidationFailure("Quantity must be at least 1")

        product = self._get_product(product_id)

        for _ in range(MAX_ADD_ATTEMPTS):
            existing = self.carts.get_for_product(session_id, product.id)

            if existing is None:
                item = CartItem(
                    session_id=session_id,
                    product_id=product.id,
                    name=product.name,
                    price=product.price,
                    image=product.image,
                    quantity=quantity,
                )
                try:
                    created = self.carts.create(item)
                except DuplicateLineItem:
                    # another request created the line first; increment it instead
                    continue
                except StockExceeded:
                    current = self.products.get_by_id(product.id)
                    self._log_rejected(
                        session_id, product.id, quantity, current.stock if current else 0
                    )
                    raise InsufficientStock()
                logger.info(
                    "Cart %s: added product %s x%d", session_id, product.id, quantity
                )
                return created, True

            updated = self.carts.increment_quantity(existing.id, quantity)
            if updated is not None:
                logger.info(
                    "Cart %s: product %s now x%d",
                    session_id,
                    product.id,
                    updated.quantity,
                )
                return updated, False

            if self.carts.get_by_id(existing.id) is not None:
                self._log_rejected(
                    session_id, product.id, existing.quantity + quantity, product.stock
                )
                raise InsufficientStock()
            # line was removed between read and increment; start over

        raise Conflict("Cart was modified concurrently, please retry")

    def set_quantity(
        self,
        session_id: str,
        item_id: str | uuid.UUID,
        quantity: int,
    ) -> CartItem | None:
        """
        Overwrite a line's quantity.

        quantity == 0 deletes the line and returns None; deleting a line
        that is already gone is not an error here (callers resolve the
        item first with `get_item` when they need a 404).

        Raises:
            ValidationFailure: quantity < 0
            NotFound: item missing (quantity > 0) or owned by another session
            InsufficientStock: quantity > current stock; the line is unchanged
        """
        if quantity < 0:
            raise ValidationFailure("Quantity must be positive")

        item_uuid = parse_id(item_id, "Cart item not found")
        item = self.carts.get_by_id(item_uuid)
        if item is not None and item.session_id != session_id:
            raise NotFound("Cart item not found")

        if quantity == 0:
            if item is not None:
                self.carts.delete(item.id)
                logger.info("Cart %s: removed line %s", session_id, item.id)
            return None

        if item is None:
            raise NotFound("Cart item not found")

        updated = self.carts.set_quantity(item.id, quantity)
        if updated is None:
            if self.carts.get_by_id(item.id) is None:
                raise NotFound("Cart item not found")
            product = self.products.get_by_id(item.product_id)
            self._log_rejected(
                session_id, item.product_id, quantity, product.stock if product else 0
            )
            raise InsufficientStock()
        return updated

    def remove_item(self, session_id: str, item_id: str | uuid.UUID) -> None:
        """
        Raises:
            NotFound: the item does not exist in this session's cart.
        """
        item = self.get_item(session_id, item_id)
        if not self.carts.delete(item.id):
            raise NotFound("Cart item not found")
        logger.info("Cart %s: removed line %s", session_id, item.id)

    def clear_cart(self, session_id: str) -> int:
        removed = self.carts.clear_session(session_id)
        logger.info("Cart %s: cleared %d line(s)", session_id, removed)
        return removed

    @staticmethod
    def _log_rejected(session_id, product_id, wanted: int, stock: int) -> None:
        logger.warning(
            "Cart %s: %d x product %s exceeds stock %d",
            session_id,
            wanted,
            product_id,
            stock,
        )
