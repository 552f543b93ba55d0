from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Product Transactions Dashboard"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./transactions.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Transaction Feed
    # ==============================
    FEED_URL: str = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    FEED_TIMEOUT_SECONDS: int = 30
    SEED_ON_STARTUP: bool = False

    # ==============================
    # Queries
    # ==============================
    DEFAULT_PER_PAGE: int = 10
    MAX_PER_PAGE: int = 100
    AGGREGATE_TIMEOUT_SECONDS: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
