# storefront/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

StorageBackend = Literal["sql", "memory", "auto"]


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Env vars (.env), all optional:
      - STORAGE_BACKEND: "sql" | "memory" | "auto"
      - DATABASE_URL (SQLAlchemy URL, only used by the sql backend)
      - JWT_SECRET (bearer token signing secret)
      - DEFAULT_SESSION_ID (shared anonymous cart; leave unset in real deployments)
    """

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"

    # Storage
    STORAGE_BACKEND: StorageBackend = "sql"
    DATABASE_URL: str = "sqlite:///./storefront.db"
    SEED_CATALOG: bool = True

    # Cart sessions
    DEFAULT_SESSION_ID: str | None = None

    # Bearer tokens
    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    FRONTEND_URL: str = "http://localhost:3000"
    PRODUCT_LIST_MAX_LIMIT: int = 100

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
