# backend/modules/payments/services/payment_service.py

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from backend.core.auth import Caller
from backend.core.exceptions import NotFoundError, PermissionError, ValidationError
from backend.core.permissions import can_act_for_customer, is_admin, owns_restaurant
from backend.core.store import Store
from backend.modules.orders.enums.order_enums import OrderStatus
from ..config.payment_config import payment_config
from ..gateways import PaymentGatewayInterface, RazorpayGateway
from ..models.payment_models import Payment, PaymentMethod, PaymentStatus
from ..schemas.payment_schemas import PaymentCreate
from ..utils.gateway_timeout import GatewayCallRunner


logger = logging.getLogger(__name__)


@lru_cache()
def get_payment_gateway() -> PaymentGatewayInterface:
    return RazorpayGateway(
        payment_config.get_gateway_config(),
        test_mode=not payment_config.is_production(),
    )


@lru_cache()
def get_gateway_runner() -> GatewayCallRunner:
    return GatewayCallRunner(
        timeout_seconds=payment_config.GATEWAY_TIMEOUT_SECONDS,
        max_workers=payment_config.GATEWAY_MAX_WORKERS,
    )


def parse_payment_method(value) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Invalid payment method")


def parse_payment_status(value) -> PaymentStatus:
    if isinstance(value, PaymentStatus):
        return value
    try:
        return PaymentStatus(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Invalid payment status")


class PaymentService:
    """
    Attaches at most one payment to each order and runs the gateway
    verification handshake for online methods.

    Gateway calls happen outside any write transaction; a failed or slow
    gateway call raises GatewayError before the payment row is touched.
    """

    def __init__(
        self,
        db: Session,
        gateway: Optional[PaymentGatewayInterface] = None,
        runner: Optional[GatewayCallRunner] = None,
    ):
        self.db = db
        self.store = Store(db)
        self.gateway = gateway or get_payment_gateway()
        self.runner = runner or get_gateway_runner()

    def process_payment(self, caller: Caller, request: PaymentCreate) -> Payment:
        method = parse_payment_method(request.payment_method)

        order = self.store.get_order(request.order_id)
        if not order:
            raise NotFoundError(f"Order not found: {request.order_id}")
        if not can_act_for_customer(caller, order):
            raise PermissionError("You can only pay for your own orders")
        if order.status == OrderStatus.CANCELLED:
            raise ValidationError("Cannot pay for a cancelled order")
        if self.store.get_payment_by_order(order.id):
            raise ValidationError("Payment already processed for this order")

        amount = order.total_amount
        transaction_id = request.transaction_id
        payment_details = None

        if not method.is_online:
            status = PaymentStatus.PENDING
        elif transaction_id:
            status = PaymentStatus.COMPLETED
        else:
            gateway_order = self.runner.call(
                "create_order",
                self.gateway.create_order,
                amount,
                payment_config.RAZORPAY_CURRENCY,
            )
            transaction_id = gateway_order.id
            payment_details = f"Razorpay Order: {gateway_order.id}"
            status = PaymentStatus.PENDING

        with self.store.in_tx():
            payment = self.store.add(
                Payment(
                    order_id=order.id,
                    amount=amount,
                    payment_method=method,
                    status=status,
                    transaction_id=transaction_id,
                    payment_details=payment_details,
                )
            )

        self.store.refresh(payment)
        logger.info(
            f"Payment {payment.id} recorded for order {order.id}: "
            f"method={method.value} status={status.value} amount={amount}"
        )
        return payment

    def create_gateway_order(self, caller: Caller, order_id: int) -> Dict[str, Any]:
        order = self.store.get_order(order_id)
        if not order:
            raise NotFoundError(f"Order not found: {order_id}")
        if not can_act_for_customer(caller, order):
            raise PermissionError("You can only pay for your own orders")

        gateway_order = self.runner.call(
            "create_order",
            self.gateway.create_order,
            order.total_amount,
            payment_config.RAZORPAY_CURRENCY,
        )
        return {
            "id": gateway_order.id,
            "amount": gateway_order.amount,
            "currency": gateway_order.currency,
            "status": gateway_order.status,
            "key_id": self.gateway.get_public_config()["key_id"],
            "created_at": gateway_order.created_at,
        }

    def verify_gateway_payment(
        self,
        caller: Caller,
        payment_id: int,
        gateway_order_id: Optional[str],
        gateway_payment_id: Optional[str],
        signature: Optional[str],
    ) -> Payment:
        payment = self.store.get_payment(payment_id)
        if not payment:
            raise NotFoundError(f"Payment not found: {payment_id}")
        order = self.store.get_order(payment.order_id)
        if not can_act_for_customer(caller, order):
            raise PermissionError("You can only verify your own payments")

        if self._already_verified(payment, gateway_payment_id):
            return payment
        self._check_verifiable(payment)
        self._check_gateway_order(payment, gateway_order_id)

        valid = self.runner.call(
            "verify_signature",
            self.gateway.verify_signature,
            gateway_order_id,
            gateway_payment_id,
            signature,
        )
        if not valid:
            logger.warning(f"Rejected gateway signature for payment {payment.id}")
            raise ValidationError("Invalid payment signature")

        capture = self.runner.call(
            "capture", self.gateway.capture, gateway_payment_id, payment.amount
        )

        with self.store.in_tx():
            payment = self.store.get_payment_for_update(payment_id)
            if self._already_verified(payment, gateway_payment_id):
                return payment
            self._check_verifiable(payment)
            self._check_gateway_order(payment, gateway_order_id)

            payment.status = PaymentStatus.COMPLETED
            payment.transaction_id = gateway_payment_id
            payment.payment_details = f"Razorpay Payment Verified: {capture.id}"

        self.store.refresh(payment)
        logger.info(f"Payment {payment.id} verified and captured ({capture.id})")
        return payment

    def update_payment_status(self, caller: Caller, payment_id: int, new_status) -> Payment:
        if not is_admin(caller):
            raise PermissionError("Only administrators can change payment status")
        new_status = parse_payment_status(new_status)

        with self.store.in_tx():
            payment = self.store.get_payment_for_update(payment_id)
            if not payment:
                raise NotFoundError(f"Payment not found: {payment_id}")
            previous_status = payment.status
            payment.status = new_status

        self.store.refresh(payment)
        logger.info(
            f"Payment {payment.id} status forced from {previous_status.value} to "
            f"{new_status.value} by admin {caller.user_id}"
        )
        return payment

    def get_payment_by_order(self, caller: Caller, order_id: int) -> Payment:
        order = self.store.get_order(order_id)
        if not order:
            raise NotFoundError(f"Order not found: {order_id}")
        restaurant = self.store.get_restaurant(order.restaurant_id)
        if not (can_act_for_customer(caller, order) or owns_restaurant(caller, restaurant)):
            raise PermissionError("You do not have access to this payment")

        payment = self.store.get_payment_by_order(order_id)
        if not payment:
            raise NotFoundError("Payment not found for order")
        return payment

    def _already_verified(self, payment: Payment, gateway_payment_id: Optional[str]) -> bool:
        return (
            payment.status == PaymentStatus.COMPLETED
            and gateway_payment_id is not None
            and payment.transaction_id == gateway_payment_id
        )

    def _check_verifiable(self, payment: Payment):
        if payment.payment_method == PaymentMethod.CASH_ON_DELIVERY:
            raise ValidationError("Cash on delivery payments are not verified online")
        if payment.status != PaymentStatus.PENDING:
            raise ValidationError(
                f"Payment cannot be verified in status {payment.status.value}"
            )

    def _check_gateway_order(self, payment: Payment, gateway_order_id: Optional[str]):
        # transaction_id holds the gateway order id until the payment completes
        if payment.transaction_id and payment.transaction_id != gateway_order_id:
            logger.warning(
                f"Gateway order {gateway_order_id} does not match payment {payment.id}"
            )
            raise ValidationError("Gateway order does not match this payment")
