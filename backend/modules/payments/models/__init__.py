# backend/modules/payments/models/__init__.py

from .payment_models import (
    PaymentStatus,
    PaymentMethod,
    Payment,
)

__all__ = ["PaymentStatus", "PaymentMethod", "Payment"]
