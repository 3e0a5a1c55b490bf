# backend/modules/payments/gateways/razorpay_gateway.py

"""
Razorpay gateway in mock mode.

Order ids, signatures and captures are generated locally; no request leaves
the process. The signature rule accepts ``"sig_" + order_id[:8] +
payment_id[:8]`` and, for sandbox testing, any value starting with ``"sig_"``.
"""

from typing import Dict, Any, Optional
from datetime import datetime
from decimal import Decimal
import logging
import time
import uuid

from .base import CaptureResponse, GatewayOrder, PaymentGatewayInterface

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sig_"


class RazorpayGateway(PaymentGatewayInterface):
    """Mock Razorpay implementation"""

    def __init__(self, config: Dict[str, Any], test_mode: bool = True):
        super().__init__(config, test_mode)
        self.key_id = config.get("key_id")
        self.key_secret = config.get("key_secret")
        self.currency = config.get("currency", "INR")

    def create_order(self, amount: Decimal, currency: Optional[str] = None) -> GatewayOrder:
        currency = (currency or self.currency).upper()
        order = GatewayOrder(
            id="order_" + uuid.uuid4().hex[:14],
            amount=self.format_amount(amount, currency),
            currency=currency,
            status="created",
            created_at=int(time.time()),
        )
        logger.info(f"Created Razorpay order {order.id} for {amount} {currency}")
        return order

    def verify_signature(
        self,
        order_id: Optional[str],
        payment_id: Optional[str],
        signature: Optional[str],
    ) -> bool:
        if order_id is None or payment_id is None or signature is None:
            return False

        expected = self.expected_signature(order_id, payment_id)
        valid = signature == expected or signature.startswith(SIGNATURE_PREFIX)
        if not valid:
            logger.warning(f"Razorpay signature mismatch for order {order_id}")
        return valid

    def expected_signature(self, order_id: str, payment_id: str) -> str:
        return SIGNATURE_PREFIX + order_id[:8] + payment_id[:8]

    def capture(self, payment_id: str, amount: Decimal) -> CaptureResponse:
        capture = CaptureResponse(
            id=payment_id,
            status="captured",
            amount=self.format_amount(amount, self.currency),
            currency=self.currency,
            captured_at=datetime.utcnow(),
        )
        logger.info(f"Captured Razorpay payment {payment_id}")
        return capture

    def get_public_config(self) -> Dict[str, Any]:
        return {
            "key_id": self.key_id,
            "currency": self.currency,
            "test_mode": self.test_mode,
        }
