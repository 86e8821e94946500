# storefront/dependencies.py
"""
FastAPI dependencies that hand out the objects built at startup
(settings, storage) and the services wired on top of them.
"""

from fastapi import Depends, Request

from storefront.core.config import Settings
from storefront.services.auth_service import AuthService
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.storage import Storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    """
    Return the Storage chosen at startup.

    Usage:

        @router.get("/example")
        def example_endpoint(storage: Storage = Depends(get_storage)):
            ...
    """
    return request.app.state.storage


def get_catalog_service(storage: Storage = Depends(get_storage)) -> CatalogService:
    return CatalogService(storage.products)


def get_cart_service(storage: Storage = Depends(get_storage)) -> CartService:
    return CartService(storage.carts, storage.products)


def get_auth_service(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(storage.users, settings)
