# backend/modules/payments/gateways/__init__.py

from .base import (
    PaymentGatewayInterface,
    GatewayOrder,
    CaptureResponse,
)
from .razorpay_gateway import RazorpayGateway

__all__ = [
    # Base classes
    "PaymentGatewayInterface",
    "GatewayOrder",
    "CaptureResponse",
    # Gateway implementations
    "RazorpayGateway",
]
