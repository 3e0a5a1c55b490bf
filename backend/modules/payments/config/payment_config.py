# backend/modules/payments/config/payment_config.py

from typing import Any, Dict
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator
from enum import Enum


class PaymentEnvironment(str, Enum):
    """Payment system environment"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


MOCK_KEY_ID = "rzp_test_mock_key"
MOCK_KEY_SECRET = "rzp_test_mock_secret"


class PaymentConfig(BaseSettings):
    """Payment system configuration with validation"""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Environment
    PAYMENT_ENVIRONMENT: PaymentEnvironment = Field(
        default=PaymentEnvironment.DEVELOPMENT, description="Payment system environment"
    )

    # Razorpay credentials
    RAZORPAY_KEY_ID: str = Field(
        default=MOCK_KEY_ID, description="Public Razorpay key id"
    )
    RAZORPAY_KEY_SECRET: str = Field(
        default=MOCK_KEY_SECRET, description="Razorpay key secret"
    )
    RAZORPAY_CURRENCY: str = Field(
        default="INR", description="Currency for gateway orders"
    )

    # Payment Gateway Timeouts
    GATEWAY_TIMEOUT_SECONDS: float = Field(
        default=5.0, description="Upper bound for a single gateway call"
    )
    GATEWAY_MAX_WORKERS: int = Field(
        default=8, description="Threads available for concurrent gateway calls"
    )

    @field_validator("RAZORPAY_CURRENCY", mode="after")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Currency codes are three letters, stored upper case"""
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Currency must be a three letter ISO code")
        return v.upper()

    @field_validator("GATEWAY_TIMEOUT_SECONDS", mode="after")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Gateway timeout must be positive")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Validate production-specific settings"""
        if self.PAYMENT_ENVIRONMENT == PaymentEnvironment.PRODUCTION:
            if self.RAZORPAY_KEY_ID == MOCK_KEY_ID or self.RAZORPAY_KEY_SECRET == MOCK_KEY_SECRET:
                raise ValueError("Razorpay credentials must be set in production")
        return self

    def get_gateway_config(self) -> Dict[str, Any]:
        """Configuration handed to the gateway implementation"""
        return {
            "key_id": self.RAZORPAY_KEY_ID,
            "key_secret": self.RAZORPAY_KEY_SECRET,
            "currency": self.RAZORPAY_CURRENCY,
        }

    def is_production(self) -> bool:
        """Check if running in production"""
        return self.PAYMENT_ENVIRONMENT == PaymentEnvironment.PRODUCTION


payment_config = PaymentConfig()
