from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="OS_", extra="ignore")

    app_name: str = "order-service"
    app_version: str = "1.0.0"
    app_description: str = "Microservice for order management"
    env: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = 8083
    log_level: str = "INFO"

    database_url: str = "sqlite+pysqlite:///./orders.db"
    test_database_url: str = "sqlite+pysqlite:///:memory:"

    order_number_prefix: str = Field(default="ORD", min_length=1, max_length=10)

    # User lookups for order views; disabling skips the remote call entirely.
    user_enrichment_enabled: bool = True
    user_service_url: str = "http://localhost:8081"
    user_service_timeout_seconds: float = Field(default=3.0, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
