# storefront/services/catalog_service.py
import logging
import uuid

from storefront.core.errors import InsufficientStock, NotFound, ValidationFailure
from storefront.models.product import Product
from storefront.repositories.base import ProductRepository
from storefront.schemas.product import ProductCreate, ProductFilter, StockAdjustment

logger = logging.getLogger(__name__)


def parse_id(raw: str | uuid.UUID, message: str) -> uuid.UUID:
    """
    Convert a path/body id to UUID. A malformed id is reported as NotFound,
    the same as an id that does not exist.
    """
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise NotFound(message)


def _check_amount(amount: int) -> None:
    if amount < 1:
        raise ValidationFailure("Amount must be at least 1")


class CatalogService:
    """
    Business logic for the product catalog.

    Responsibilities:
      - product lookup (malformed id == missing product)
      - filtered / sorted listing
      - admin creation (enforced at router via require_admin)
      - stock increase / decrease keeping stock >= 0
    """

    def __init__(self, products: ProductRepository):
        self.products = products

    def list_products(self, criteria: ProductFilter) -> list[Product]:
        return self.products.search(criteria)

    def list_by_category(self, category: str, limit: int) -> list[Product]:
        return self.products.search(
            ProductFilter(category_contains=category, limit=limit)
        )

    def get_product(self, product_id: str | uuid.UUID) -> Product:
        product = self.products.get_by_id(parse_id(product_id, "Product not found"))
        if product is None:
            raise NotFound("Product not found")
        return product

    def create_product(self, payload: ProductCreate) -> Product:
        product = Product(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            image=payload.image,
            category=payload.category.value,
            stock=payload.stock,
        )
        created = self.products.create(product)
        logger.info("Created product %s (%s)", created.id, created.name)
        return created

    def decrease_stock(self, product_id: str | uuid.UUID, amount: int) -> Product:
        _check_amount(amount)
        product = self.get_product(product_id)
        updated = self.products.decrease_stock(product.id, amount)
        if updated is None:
            logger.warning(
                "Refused to take %d units from product %s", amount, product.id
            )
            raise InsufficientStock()
        return updated

    def increase_stock(self, product_id: str | uuid.UUID, amount: int) -> Product:
        _check_amount(amount)
        product = self.get_product(product_id)
        updated = self.products.increase_stock(product.id, amount)
        if updated is None:
            raise NotFound("Product not found")
        return updated

    def adjust_stock(
        self, product_id: str | uuid.UUID, payload: StockAdjustment
    ) -> Product:
        if payload.operation == "decrease":
            return self.decrease_stock(product_id, payload.amount)
        return self.increase_stock(product_id, payload.amount)
