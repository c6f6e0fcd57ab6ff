"""Application configuration via pydantic-settings."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PAYMENT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "payment-service"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 4

    # Storage
    store_backend: Literal["sql", "memory"] = "sql"
    database_url: str = "sqlite+aiosqlite:///./payments.db"
    database_echo: bool = False
    db_pool_size: int = 20
    db_max_overflow: int = 10

    # Transaction identifiers
    transaction_id_prefix: str = "TXN_"

    # Simulated gateway
    high_value_limit: Decimal = Decimal("10000")
    declined_card_suffix: str = "0000"
    gateway_success_rate: float = Field(default=0.95, ge=0.0, le=1.0)

    # Logging
    slow_request_seconds: float = 1.0

    # CORS
    cors_origins: List[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
