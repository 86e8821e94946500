# storefront/repositories/sql.py
"""
SQLModel-backed repositories (persistent backend).

- Pure DB operations, no FastAPI, no business rules.
- Each call opens its own short Session on the shared engine; objects
  are returned detached (expire_on_commit=False) so callers can read them
  after the session is closed.
- Stock-sensitive writes are single UPDATE or INSERT ... SELECT statements
  with the stock condition in the WHERE clause; the affected row count
  tells whether the condition held.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, func, insert, literal, or_, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

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

PRODUCT_SORTS = {
    "price-low": (Product.price.asc(),),
    "price-high": (Product.price.desc(),),
    "name": (Product.name.asc(),),
    "newest": (Product.created_at.desc(),),
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SqlRepository:
    def __init__(self, engine: Engine):
        self.engine = engine

    def _session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)


class SqlProductRepository(SqlRepository, ProductRepository):

    def get_by_id(self, product_id: uuid.UUID) -> Product | None:
        with self._session() as session:
            return session.get(Product, product_id)

    def search(self, criteria: ProductFilter) -> list[Product]:
        stmt = select(Product)
        if criteria.category:
            stmt = stmt.where(Product.category == criteria.category)
        if criteria.category_contains:
            stmt = stmt.where(
                func.lower(Product.category).contains(
                    criteria.category_contains.lower(), autoescape=True
                )
            )
        if criteria.search:
            term = criteria.search.lower()
            stmt = stmt.where(
                or_(
                    func.lower(Product.name).contains(term, autoescape=True),
                    func.lower(Product.description).contains(term, autoescape=True),
                )
            )
        stmt = stmt.order_by(*PRODUCT_SORTS[criteria.sort]).limit(criteria.limit)
        with self._session() as session:
            return list(session.exec(stmt).all())

    def create(self, product: Product) -> Product:
        with self._session() as session:
            session.add(product)
            session.commit()
            session.refresh(product)
            return product

    def count(self) -> int:
        with self._session() as session:
            return session.exec(select(func.count()).select_from(Product)).one()

    def _apply_stock_update(self, product_id: uuid.UUID, stmt) -> Product | None:
        with self._session() as session:
            result = session.connection().execute(stmt)
            if result.rowcount == 0:
                session.rollback()
                return None
            session.commit()
            return session.get(Product, product_id)

    def decrease_stock(self, product_id: uuid.UUID, amount: int) -> Product | None:
        stmt = (
            update(Product)
            .where(Product.id == product_id, Product.stock >= amount)
            .values(stock=Product.stock - amount, updated_at=_now())
        )
        return self._apply_stock_update(product_id, stmt)

    def increase_stock(self, product_id: uuid.UUID, amount: int) -> Product | None:
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock + amount, updated_at=_now())
        )
        return self._apply_stock_update(product_id, stmt)


class SqlCartRepository(SqlRepository, CartRepository):

    def list_for_session(self, session_id: str) -> list[CartItem]:
        stmt = (
            select(CartItem)
            .where(CartItem.session_id == session_id)
            .order_by(CartItem.created_at.asc())
        )
        with self._session() as session:
            return list(session.exec(stmt).all())

    def get_by_id(self, item_id: uuid.UUID) -> CartItem | None:
        with self._session() as session:
            return session.get(CartItem, item_id)

    def get_for_product(
        self, session_id: str, product_id: uuid.UUID
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.session_id == session_id, CartItem.product_id == product_id
        )
        with self._session() as session:
            return session.exec(stmt).first()

    def create(self, item: CartItem) -> CartItem:
        # INSERT ... SELECT <values> WHERE (product stock) >= quantity
        columns = CartItem.__table__.columns
        values = item.model_dump()
        in_stock = (
            select(Product.stock)
            .where(Product.id == item.product_id)
            .scalar_subquery()
            >= item.quantity
        )
        row = select(
            *[literal(values[col.name], col.type).label(col.name) for col in columns]
        ).where(in_stock)
        stmt = insert(CartItem).from_select([col.name for col in columns], row)

        with self._session() as session:
            try:
                result = session.connection().execute(stmt)
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateLineItem(str(item.product_id)) from exc
            if result.rowcount == 0:
                session.rollback()
                raise StockExceeded(str(item.product_id))
            session.commit()
            return session.get(CartItem, item.id)

    def _conditional_update(self, item_id: uuid.UUID, stmt) -> CartItem | None:
        with self._session() as session:
            result = session.connection().execute(stmt)
            if result.rowcount == 0:
                session.rollback()
                return None
            session.commit()
            return session.get(CartItem, item_id)

    @staticmethod
    def _current_stock():
        # correlated against the cart_items row being updated
        return (
            select(Product.stock)
            .where(Product.id == CartItem.product_id)
            .correlate(CartItem)
            .scalar_subquery()
        )

    def increment_quantity(self, item_id: uuid.UUID, amount: int) -> CartItem | None:
        stmt = (
            update(CartItem)
            .where(
                CartItem.id == item_id,
                CartItem.quantity + amount <= self._current_stock(),
            )
            .values(quantity=CartItem.quantity + amount, updated_at=_now())
        )
        return self._conditional_update(item_id, stmt)

    def set_quantity(self, item_id: uuid.UUID, quantity: int) -> CartItem | None:
        stmt = (
            update(CartItem)
            .where(
                CartItem.id == item_id,
                self._current_stock() >= quantity,
            )
            .values(quantity=quantity, updated_at=_now())
        )
        return self._conditional_update(item_id, stmt)

    def delete(self, item_id: uuid.UUID) -> bool:
        with self._session() as session:
            result = session.connection().execute(
                delete(CartItem).where(CartItem.id == item_id)
            )
            session.commit()
            return result.rowcount > 0

    def clear_session(self, session_id: str) -> int:
        with self._session() as session:
            result = session.connection().execute(
                delete(CartItem).where(CartItem.session_id == session_id)
            )
            session.commit()
            return result.rowcount


class SqlUserRepository(SqlRepository, UserRepository):

    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        with self._session() as session:
            return session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.lower())
        with self._session() as session:
            return session.exec(stmt).first()

    def create(self, user: User) -> User:
        with self._session() as session:
            session.add(user)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateUser(user.email) from exc
            session.refresh(user)
            return user
