# storefront/seed.py
"""
Sample catalog.

Inserted into an empty product store at startup (SEED_CATALOG=true) and
used as the fixture data of the in-memory backend.
"""

import logging

from storefront.models.product import Category, Product
from storefront.repositories.base import ProductRepository

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS: list[dict] = [
    {
        "name": "Wireless Bluetooth Headphones",
        "description": "High-quality wireless headphones with noise cancellation and 30-hour battery life.",
        "price": 99.99,
        "image": "https://via.placeholder.com/300x300/4A90E2/FFFFFF?text=Headphones",
        "category": Category.ELECTRONICS,
        "stock": 50,
    },
    {
        "name": "Smartphone Case",
        "description": "Durable protective case for smartphones with shock absorption and wireless charging compatibility.",
        "price": 24.99,
        "image": "https://via.placeholder.com/300x300/50C878/FFFFFF?text=Phone+Case",
        "category": Category.ACCESSORIES,
        "stock": 100,
    },
    {
        "name": "Laptop Stand",
        "description": "Adjustable aluminum laptop stand for better ergonomics and cooling.",
        "price": 49.99,
        "image": "https://via.placeholder.com/300x300/FF6B6B/FFFFFF?text=Laptop+Stand",
        "category": Category.OFFICE,
        "stock": 30,
    },
    {
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse with precision tracking and long battery life.",
        "price": 34.99,
        "image": "https://via.placeholder.com/300x300/A8E6CF/FFFFFF?text=Mouse",
        "category": Category.ELECTRONICS,
        "stock": 75,
    },
    {
        "name": "USB-C Cable",
        "description": "Fast charging USB-C cable with data transfer capability, 6ft length.",
        "price": 14.99,
        "image": "https://via.placeholder.com/300x300/FFD93D/FFFFFF?text=USB+Cable",
        "category": Category.ACCESSORIES,
        "stock": 200,
    },
    {
        "name": "Desk Organizer",
        "description": "Multi-compartment desk organizer to keep your workspace tidy and efficient.",
        "price": 39.99,
        "image": "https://via.placeholder.com/300x300/B19CD9/FFFFFF?text=Organizer",
        "category": Category.OFFICE,
        "stock": 45,
    },
]


def seed_catalog(products: ProductRepository) -> int:
    """
    Insert SAMPLE_PRODUCTS if the store holds no product yet.

    Returns:
        Number of products inserted (0 when the catalog was not empty).
    """
    if products.count() > 0:
        return 0

    for data in SAMPLE_PRODUCTS:
        products.create(Product(**{**data, "category": data["category"].value}))

    logger.info("Seeded %d sample products", len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)
