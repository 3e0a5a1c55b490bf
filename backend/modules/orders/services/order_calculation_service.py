# backend/modules/orders/services/order_calculation_service.py

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple
import logging

from backend.core.config import settings

logger = logging.getLogger(__name__)

MINOR_UNITS = 100
CENT = Decimal("0.01")


def to_minor_units(amount) -> int:
    """Convert a decimal amount (e.g. rupees) to integer minor units (paise)."""
    value = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    return int(value * MINOR_UNITS)


def from_minor_units(amount: int) -> Decimal:
    return (Decimal(amount) / MINOR_UNITS).quantize(CENT)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    discount: Decimal
    total_amount: Decimal


class OrderCalculationService:
    """Calculates line subtotals and order totals in minor currency units"""

    def __init__(self, tax_rate=None, delivery_fee=None):
        self.tax_rate = Decimal(str(
            settings.order_tax_rate if tax_rate is None else tax_rate
        ))
        self.delivery_fee = Decimal(str(
            settings.order_delivery_fee if delivery_fee is None else delivery_fee
        ))

    def line_subtotal(self, unit_price, quantity: int) -> Decimal:
        return from_minor_units(to_minor_units(unit_price) * quantity)

    def calculate_order_totals(
        self, lines: Iterable[Tuple[Decimal, int]], discount=Decimal("0.00")
    ) -> OrderTotals:
        """
        Calculate subtotal, tax, delivery fee and total for priced lines

        Args:
            lines: (unit price, quantity) pairs
            discount: Amount taken off the total

        Returns:
            OrderTotals with every amount rounded to two decimals
        """
        subtotal = sum(to_minor_units(price) * quantity for price, quantity in lines)
        tax = int(
            (Decimal(subtotal) * self.tax_rate).quantize(
                Decimal("1"), rounding=ROUND_HALF_UP
            )
        )
        fee = to_minor_units(self.delivery_fee)
        discount_minor = to_minor_units(discount)
        total = subtotal + fee + tax - discount_minor

        totals = OrderTotals(
            subtotal=from_minor_units(subtotal),
            delivery_fee=from_minor_units(fee),
            tax=from_minor_units(tax),
            discount=from_minor_units(discount_minor),
            total_amount=from_minor_units(total),
        )
        logger.debug(f"Calculated order totals: {totals}")
        return totals
