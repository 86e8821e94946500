# storefront/repositories/memory.py
"""
In-memory repositories (fixture backend).

Used when STORAGE_BACKEND=memory, when "auto" cannot reach the database,
and by the test-suite. Rows are kept as plain dicts and a fresh model is
built on every read, so callers never hold a reference into the store.

All repositories of one MemoryStore share a single re-entrant lock, which
makes each read-check-write below atomic with respect to the others
(FastAPI runs sync endpoints on a thread pool).
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from storefront.models.cart import CartItem
from storefront.models.product import Product
from storefront.models.user import User
from storefront.repositories.base import (
    CartRepository,
    DuplicateLineItem,
    DuplicateUser,
    ProductRepository,
    StockExceeded,
    UserRepository,
)
from storefront.schemas.product import ProductFilter


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    """Shared tables + lock for one in-memory backend instance."""

    def __init__(self):
        self.lock = threading.RLock()
        self.products: dict[uuid.UUID, dict[str, Any]] = {}
        self.cart_items: dict[uuid.UUID, dict[str, Any]] = {}
        self.users: dict[uuid.UUID, dict[str, Any]] = {}


class MemoryProductRepository(ProductRepository):

    def __init__(self, store: MemoryStore):
        self.store = store

    def get_by_id(self, product_id: uuid.UUID) -> Product | None:
        with self.store.lock:
            row = self.store.products.get(product_id)
            return Product(**row) if row else None

    def search(self, criteria: ProductFilter) -> list[Product]:
        with self.store.lock:
            rows = list(self.store.products.values())

        if criteria.category:
            rows = [r for r in rows if r["category"] == criteria.category]
        if criteria.category_contains:
            needle = criteria.category_contains.lower()
            rows = [r for r in rows if needle in r["category"].lower()]
        if criteria.search:
            needle = criteria.search.lower()
            rows = [
                r
                for r in rows
                if needle in r["name"].lower() or needle in r["description"].lower()
            ]

        if criteria.sort == "price-low":
            rows.sort(key=lambda r: r["price"])
        elif criteria.sort == "price-high":
            rows.sort(key=lambda r: r["price"], reverse=True)
        elif criteria.sort == "name":
            rows.sort(key=lambda r: r["name"])
        else:
            rows.sort(key=lambda r: r["created_at"], reverse=True)

        return [Product(**r) for r in rows[: criteria.limit]]

    def create(self, product: Product) -> Product:
        with self.store.lock:
            self.store.products[product.id] = product.model_dump()
            return Product(**self.store.products[product.id])

    def count(self) -> int:
        with self.store.lock:
            return len(self.store.products)

    def decrease_stock(self, product_id: uuid.UUID, amount: int) -> Product | None:
        with self.store.lock:
            row = self.store.products.get(product_id)
            if row is None or row["stock"] < amount:
                return None
            row["stock"] -= amount
            row["updated_at"] = _now()
            return Product(**row)

    def increase_stock(self, product_id: uuid.UUID, amount: int) -> Product | None:
        with self.store.lock:
            row = self.store.products.get(product_id)
            if row is None:
                return None
            row["stock"] += amount
            row["updated_at"] = _now()
            return Product(**row)


class MemoryCartRepository(CartRepository):

    def __init__(self, store: MemoryStore):
        self.store = store

    def list_for_session(self, session_id: str) -> list[CartItem]:
        # dicts keep insertion order, which is creation order
        with self.store.lock:
            return [
                CartItem(**row)
                for row in self.store.cart_items.values()
                if row["session_id"] == session_id
            ]

    def get_by_id(self, item_id: uuid.UUID) -> CartItem | None:
        with self.store.lock:
            row = self.store.cart_items.get(item_id)
            return CartItem(**row) if row else None

    def get_for_product(
        self, session_id: str, product_id: uuid.UUID
    ) -> CartItem | None:
        with self.store.lock:
            for row in self.store.cart_items.values():
                if row["session_id"] == session_id and row["product_id"] == product_id:
                    return CartItem(**row)
            return None

    def create(self, item: CartItem) -> CartItem:
        with self.store.lock:
            if self.get_for_product(item.session_id, item.product_id) is not None:
                raise DuplicateLineItem(str(item.product_id))
            if item.quantity > self._stock_of(item.product_id):
                raise StockExceeded(str(item.product_id))
            self.store.cart_items[item.id] = item.model_dump()
            return CartItem(**self.store.cart_items[item.id])

    def _stock_of(self, product_id: uuid.UUID) -> int:
        product = self.store.products.get(product_id)
        return product["stock"] if product else 0

    def increment_quantity(self, item_id: uuid.UUID, amount: int) -> CartItem | None:
        with self.store.lock:
            row = self.store.cart_items.get(item_id)
            if row is None:
                return None
            new_qty = row["quantity"] + amount
            if new_qty > self._stock_of(row["product_id"]):
                return None
            row["quantity"] = new_qty
            row["updated_at"] = _now()
            return CartItem(**row)

    def set_quantity(self, item_id: uuid.UUID, quantity: int) -> CartItem | None:
        with self.store.lock:
            row = self.store.cart_items.get(item_id)
            if row is None or quantity > self._stock_of(row["product_id"]):
                return None
            row["quantity"] = quantity
            row["updated_at"] = _now()
            return CartItem(**row)

    def delete(self, item_id: uuid.UUID) -> bool:
        with self.store.lock:
            return self.store.cart_items.pop(item_id, None) is not None

    def clear_session(self, session_id: str) -> int:
        with self.store.lock:
            doomed = [
                item_id
                for item_id, row in self.store.cart_items.items()
                if row["session_id"] == session_id
            ]
            for item_id in doomed:
                del self.store.cart_items[item_id]
            return len(doomed)


class MemoryUserRepository(UserRepository):

    def __init__(self, store: MemoryStore):
        self.store = store

    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        with self.store.lock:
            row = self.store.users.get(user_id)
            return User(**row) if row else None

    def get_by_email(self, email: str) -> User | None:
        email = email.lower()
        with self.store.lock:
            for row in self.store.users.values():
                if row["email"] == email:
                    return User(**row)
            return None

    def create(self, user: User) -> User:
        with self.store.lock:
            if self.get_by_email(user.email) is not None:
                raise DuplicateUser(user.email)
            self.store.users[user.id] = user.model_dump()
            return User(**self.store.users[user.id])
