# storefront/database.py
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

# Import models so SQLModel metadata is populated before create_all()
from storefront.models import cart as _cart_models  # noqa: F401
from storefront.models import product as _product_models  # noqa: F401
from storefront.models import user as _user_models  # noqa: F401


def build_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for the persistent backend.

    - sqlite:  allow use from FastAPI's worker threads; an in-memory
               URL gets a StaticPool so every session sees the same db
    - others:  pool_pre_ping=True to validate pooled connections
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url == "sqlite://":
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=False, **kwargs)

    return create_engine(database_url, echo=False, pool_pre_ping=True)


def ping(engine: Engine) -> None:
    """Round-trip a trivial query; raises if the database is unreachable."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)
