# storefront/storage.py
"""
Storage backend selection.

The backend is chosen exactly once, at application startup, and kept on
`app.state.storage`. Request handlers reach it through
`storefront.dependencies.get_storage`.

Backends:
  - "sql":    SQLModel repositories on DATABASE_URL (fails startup if unreachable)
  - "memory": in-memory fixture repositories
  - "auto":   "sql" if the database answers at startup, otherwise "memory"
"""

import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.config import Settings
from storefront.database import build_engine, create_db_and_tables, ping
from storefront.repositories.base import (
    CartRepository,
    ProductRepository,
    UserRepository,
)
from storefront.repositories.memory import (
    MemoryCartRepository,
    MemoryProductRepository,
    MemoryStore,
    MemoryUserRepository,
)
from storefront.repositories.sql import (
    SqlCartRepository,
    SqlProductRepository,
    SqlUserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Storage:
    backend: str
    products: ProductRepository
    carts: CartRepository
    users: UserRepository
    engine: Engine | None = None

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def memory_storage() -> Storage:
    store = MemoryStore()
    return Storage(
        backend="memory",
        products=MemoryProductRepository(store),
        carts=MemoryCartRepository(store),
        users=MemoryUserRepository(store),
    )


def sql_storage(engine: Engine) -> Storage:
    create_db_and_tables(engine)
    return Storage(
        backend="sql",
        products=SqlProductRepository(engine),
        carts=SqlCartRepository(engine),
        users=SqlUserRepository(engine),
        engine=engine,
    )


def build_storage(settings: Settings) -> Storage:
    """
    Build the repositories for the configured backend.

    Raises:
        SQLAlchemyError: backend "sql" and the database is unreachable.
    """
    if settings.STORAGE_BACKEND == "memory":
        return memory_storage()

    engine = build_engine(settings.DATABASE_URL)
    try:
        ping(engine)
    except SQLAlchemyError as e:
        if settings.STORAGE_BACKEND == "sql":
            raise
        engine.dispose()
        logger.warning(
            "Database unreachable (%s); falling back to in-memory storage", e
        )
        return memory_storage()

    return sql_storage(engine)

