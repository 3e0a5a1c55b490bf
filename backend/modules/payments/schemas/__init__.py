# backend/modules/payments/schemas/__init__.py

from .payment_schemas import (
    PaymentCreate,
    PaymentResponse,
    GatewayOrderResponse,
    GatewayPublicConfig,
)

__all__ = [
    "PaymentCreate",
    "PaymentResponse",
    "GatewayOrderResponse",
    "GatewayPublicConfig",
]
