# storefront/repositories/base.py
"""
Storage interface shared by the SQL and in-memory backends.

Services depend only on these abstract classes; the concrete backend is
picked once at startup (see storefront.storage).

Every mutation that must respect product stock is a single conditional
operation here (check + write as one step), so two concurrent requests
cannot both pass the check and overwrite each other.
"""

import uuid
from abc import ABC, abstractmethod

from storefront.models.cart import CartItem
from storefront.models.product import Product
from storefront.models.user import User
from storefront.schemas.product import ProductFilter


class DuplicateLineItem(Exception):
    """A line item for (session_id, product_id) already exists."""


class StockExceeded(Exception):
    """The requested line quantity is above the product's current stock."""


class DuplicateUser(Exception):
    """A user with this email already exists."""


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: uuid.UUID) -> Product | None: ...

    @abstractmethod
    def search(self, criteria: ProductFilter) -> list[Product]: ...

    @abstractmethod
    def create(self, product: Product) -> Product: ...

    @abstractmethod
    def count(self) -> int: ...

    @abstractmethod
    def decrease_stock(self, product_id: uuid.UUID, amount: int) -> Product | None:
        """
        Atomically subtract `amount` if stock >= amount.

        Returns the updated product, or None when the product is missing
        or the stock is too low (nothing is written in either case).
        """

    @abstractmethod
    def increase_stock(self, product_id: uuid.UUID, amount: int) -> Product | None:
        """Atomically add `amount`. Returns None if the product is missing."""


class CartRepository(ABC):

    @abstractmethod
    def list_for_session(self, session_id: str) -> list[CartItem]:
        """Line items of a session, oldest first."""

    @abstractmethod
    def get_by_id(self, item_id: uuid.UUID) -> CartItem | None: ...

    @abstractmethod
    def get_for_product(
        self, session_id: str, product_id: uuid.UUID
    ) -> CartItem | None: ...

    @abstractmethod
    def create(self, item: CartItem) -> CartItem:
        """
        Insert a new line item, only if its quantity is <= the product's
        current stock. Check and insert are one step.

        Raises:
            DuplicateLineItem: if the session already holds the product.
            StockExceeded: stock is too low, or the product is gone.
        """

    @abstractmethod
    def increment_quantity(self, item_id: uuid.UUID, amount: int) -> CartItem | None:
        """
        quantity += amount, only if the result is <= the product's current stock.

        Returns the updated item, or None when the condition failed
        or the item no longer exists.
        """

    @abstractmethod
    def set_quantity(self, item_id: uuid.UUID, quantity: int) -> CartItem | None:
        """
        quantity = quantity (>= 1), only if it is <= the product's current stock.

        Returns the updated item, or None when the condition failed
        or the item no longer exists.
        """

    @abstractmethod
    def delete(self, item_id: uuid.UUID) -> bool:
        """Delete a line item. Returns False if it was already gone."""

    @abstractmethod
    def clear_session(self, session_id: str) -> int:
        """Delete every line item of a session, returning how many were removed."""


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: uuid.UUID) -> User | None: ...

    @abstractmethod
    def get_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    def create(self, user: User) -> User:
        """
        Raises:
            DuplicateUser: if the email is taken.
        """
