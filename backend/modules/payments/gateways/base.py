# backend/modules/payments/gateways/base.py

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from datetime import datetime
from decimal import Decimal
from dataclasses import dataclass


@dataclass
class GatewayOrder:
    """Order created at the gateway ahead of a client-side payment"""
    id: str
    amount: int  # smallest currency unit
    currency: str
    status: str = "created"
    created_at: int = 0  # epoch seconds


@dataclass
class CaptureResponse:
    """Result of capturing an authorized payment"""
    id: str
    status: str
    amount: int  # smallest currency unit
    currency: str
    captured_at: Optional[datetime] = None


class PaymentGatewayInterface(ABC):
    """Abstract interface for payment gateways

    Implementations are called from worker threads with a bounded timeout
    and are never retried by the caller.
    """

    def __init__(self, config: Dict[str, Any], test_mode: bool = True):
        """
        Initialize payment gateway

        Args:
            config: Gateway-specific configuration
            test_mode: Whether to use test/sandbox mode
        """
        self.config = config
        self.test_mode = test_mode

    @abstractmethod
    def create_order(self, amount: Decimal, currency: str) -> GatewayOrder:
        """
        Create a payment order

        Args:
            amount: Decimal amount in major units
            currency: ISO currency code

        Returns:
            GatewayOrder with the gateway's opaque order id
        """
        pass

    @abstractmethod
    def verify_signature(
        self,
        order_id: Optional[str],
        payment_id: Optional[str],
        signature: Optional[str],
    ) -> bool:
        """
        Verify the signature the client received after paying

        Returns:
            False for a bad signature or any missing argument
        """
        pass

    @abstractmethod
    def capture(self, payment_id: str, amount: Decimal) -> CaptureResponse:
        """
        Capture a previously authorized payment

        Args:
            payment_id: Gateway payment ID
            amount: Amount to capture in major units

        Returns:
            CaptureResponse with capture details
        """
        pass

    @abstractmethod
    def get_public_config(self) -> Dict[str, Any]:
        """
        Get public configuration for frontend

        Returns:
            Dict with public keys/config
        """
        pass

    def format_amount(self, amount: Decimal, currency: str = "INR") -> int:
        """
        Format amount for gateway (usually convert to paise/cents)

        Args:
            amount: Decimal amount
            currency: Currency code

        Returns:
            Integer amount in smallest currency unit
        """
        if currency.upper() in ['JPY', 'KRW']:
            # Zero decimal currencies
            return int(Decimal(str(amount)))
        return int((Decimal(str(amount)) * 100).to_integral_value())
