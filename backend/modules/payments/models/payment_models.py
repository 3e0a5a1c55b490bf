# backend/modules/payments/models/payment_models.py

from sqlalchemy import (
    Column, Integer, String, ForeignKey, Numeric, Enum as SQLEnum,
    UniqueConstraint
)
from backend.core.database import Base
from backend.core.mixins import TimestampMixin
from enum import Enum


class PaymentStatus(str, Enum):
    """Payment status states"""
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentMethod(str, Enum):
    """Payment method types"""
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    UPI = "UPI"
    WALLET = "WALLET"

    @property
    def is_online(self) -> bool:
        return self != PaymentMethod.CASH_ON_DELIVERY


class Payment(Base, TimestampMixin):
    """Payment record, at most one per order"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)

    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(
        SQLEnum(PaymentMethod, name="paymentmethod", native_enum=False, length=32),
        nullable=False,
    )
    status = Column(
        SQLEnum(PaymentStatus, name="paymentstatus", native_enum=False, length=32),
        nullable=False,
        default=PaymentStatus.PENDING,
        index=True,
    )

    # Gateway order id while pending, gateway payment id once captured
    transaction_id = Column(String(255), nullable=True, index=True)
    payment_details = Column(String(500), nullable=True)

    __table_args__ = (
        UniqueConstraint("order_id", name="uq_payments_order_id"),
    )
