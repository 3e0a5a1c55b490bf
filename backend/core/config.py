"""
Application configuration.

Settings are read from environment variables (and an optional ``.env`` file)
so secrets and per-deployment values never live in code.
"""

from decimal import Decimal
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Database Configuration
    database_url: str = "sqlite:///./food_delivery.db"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    auto_create_tables: bool = False

    cors_origins: List[str] = ["http://localhost:3000"]

    # JWT Authentication - MUST be overridden in production
    jwt_secret_key: str = "dev-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Environment Settings
    environment: str = "development"
    log_level: str = "INFO"
    log_sql_queries: bool = False
    slow_query_threshold: float = Field(
        default=1.0, description="Seconds before a statement is logged as slow"
    )

    # Order pricing
    order_delivery_fee: Decimal = Field(
        default=Decimal("50.00"), description="Flat delivery fee per order"
    )
    order_tax_rate: Decimal = Field(
        default=Decimal("0.05"), description="Tax rate applied to the subtotal"
    )

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    @field_validator("order_tax_rate")
    @classmethod
    def validate_tax_rate(cls, v: Decimal) -> Decimal:
        if v < 0 or v >= 1:
            raise ValueError("order_tax_rate must be between 0 and 1")
        return v

    @field_validator("order_delivery_fee")
    @classmethod
    def validate_delivery_fee(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("order_delivery_fee must not be negative")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
