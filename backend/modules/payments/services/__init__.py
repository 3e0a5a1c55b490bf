# backend/modules/payments/services/__init__.py

from .payment_service import (
    PaymentService,
    get_gateway_runner,
    get_payment_gateway,
)

__all__ = ["PaymentService", "get_gateway_runner", "get_payment_gateway"]
