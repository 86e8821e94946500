# storefront/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import Settings, get_settings
from storefront.core.errors import register_exception_handlers
from storefront.core.session import SESSION_HEADER
from storefront.routers.auth import router as auth_router
from storefront.routers.cart import router as cart_router
from storefront.routers.products import router as products_router
from storefront.seed import seed_catalog
from storefront.storage import build_storage

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")

VERSION = "1.0.0"


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: explicit settings (tests); defaults to the cached env settings.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        Startup:
          - Pick the storage backend once (sql / memory / auto).
          - Seed the sample catalog into an empty product store.

        Shutdown:
          - Dispose of the SQL engine, if any.
        """
        logger.info("Startup: selecting %s storage...", settings.STORAGE_BACKEND)
        try:
            storage = build_storage(settings)
        except Exception as e:
            logger.error("Startup: storage initialisation FAILED: %s", e)
            raise
        logger.info("Startup: using %s storage", storage.backend)

        if settings.SEED_CATALOG:
            inserted = seed_catalog(storage.products)
            if inserted:
                logger.info("Startup: seeded %d products", inserted)

        app.state.storage = storage
        yield
        storage.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[SESSION_HEADER],
    )

    register_exception_handlers(app, expose_errors=not settings.is_production)

    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(cart_router, prefix=settings.API_PREFIX)
    app.include_router(auth_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root():
        """Service banner / health check."""
        return {
            "message": "E-Commerce API Server is running!",
            "version": VERSION,
            "endpoints": {
                "products": f"{settings.API_PREFIX}/products",
                "cart": f"{settings.API_PREFIX}/cart",
                "auth": f"{settings.API_PREFIX}/auth",
            },
        }

    return app


app = create_app()
