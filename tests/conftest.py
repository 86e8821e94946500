"""
Shared fixtures.

- `storage`: repositories of each backend (in-memory and SQLite file),
  used by service / repository tests.
- `client`: FastAPI TestClient over the in-memory backend with the
  sample catalog seeded, used by the API tests.
"""
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from storefront.core.config import Settings
from storefront.core.security import create_access_token, hash_password
from storefront.database import build_engine
from storefront.main import create_app
from storefront.models.product import Category, Product
from storefront.models.user import User
from storefront.schemas.product import ProductFilter
from storefront.storage import Storage, memory_storage, sql_storage

TEST_PASSWORD = "secret123"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        STORAGE_BACKEND="memory",
        SEED_CATALOG=True,
        JWT_SECRET="test-secret",
        DEFAULT_SESSION_ID=None,
    )


@pytest.fixture(params=["memory", "sql"])
def storage(request, tmp_path) -> Storage:
    """Fresh, empty storage of each backend."""
    if request.param == "memory":
        s = memory_storage()
    else:
        s = sql_storage(build_engine(f"sqlite:///{tmp_path / 'storefront.db'}"))
    yield s
    s.close()


@pytest.fixture
def make_product(storage: Storage) -> Callable[..., Product]:
    def _make(**overrides) -> Product:
        data = {
            "name": "Test Product",
            "description": "A product used by the tests",
            "price": 10.0,
            "image": "https://example.com/p.png",
            "category": Category.OTHER.value,
            "stock": 10,
        }
        data.update(overrides)
        return storage.products.create(Product(**data))

    return _make


@pytest.fixture
def set_price(storage: Storage) -> Callable[[Product, float], None]:
    """Change a catalog price behind the service layer's back."""

    def _set(product: Product, price: float) -> None:
        if storage.engine is not None:
            with Session(storage.engine) as session:
                row = session.get(Product, product.id)
                row.price = price
                session.add(row)
                session.commit()
        else:
            storage.products.store.products[product.id]["price"] = price

    return _set


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def app_storage(app, client) -> Storage:
    return app.state.storage


@pytest.fixture
def catalog(app_storage: Storage) -> dict[str, Product]:
    """Seeded products by name."""
    return {p.name: p for p in app_storage.products.search(ProductFilter(limit=100))}


def _create_user(storage: Storage, email: str, role: str) -> User:
    return storage.users.create(
        User(
            name=email.split("@", 1)[0],
            email=email,
            password_hash=hash_password(TEST_PASSWORD),
            role=role,
        )
    )


@pytest.fixture
def admin_headers(app_storage: Storage, settings: Settings) -> dict[str, str]:
    admin = _create_user(app_storage, "admin@example.com", "admin")
    return {"Authorization": f"Bearer {create_access_token(settings, str(admin.id))}"}


@pytest.fixture
def user_headers(app_storage: Storage, settings: Settings) -> dict[str, str]:
    user = _create_user(app_storage, "john@example.com", "user")
    return {"Authorization": f"Bearer {create_access_token(settings, str(user.id))}"}
