# backend/modules/payments/config/__init__.py

from .payment_config import (
    PaymentConfig,
    PaymentEnvironment,
    payment_config,
)

__all__ = [
    "PaymentConfig",
    "PaymentEnvironment",
    "payment_config",
]
