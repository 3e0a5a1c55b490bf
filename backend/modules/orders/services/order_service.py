# backend/modules/orders/services/order_service.py

"""
Order placement and the order status state machine.

Every status write locks the order row, re-reads the current status and
validates the edge before committing, so concurrent updates cannot produce
a sequence outside the transition graph.
"""

from datetime import datetime, timedelta
from typing import List, Tuple
import logging

from sqlalchemy.orm import Session

from backend.core.auth import Caller, UserRole
from backend.core.exceptions import NotFoundError, PermissionError, ValidationError
from backend.core.permissions import (
    can_act_for_customer,
    can_manage_restaurant,
    can_view_order,
    is_admin,
    is_assigned_partner,
    owns_restaurant,
)
from backend.core.store import Store
from backend.modules.deliveries.enums.delivery_enums import DeliveryStatus
from ..enums.order_enums import (
    CANCELLABLE_STATUSES,
    PARTNER_TARGET_STATUSES,
    TERMINAL_STATUSES,
    OrderStatus,
    is_valid_transition,
)
from ..models.order_models import Order, OrderItem
from ..schemas.order_schemas import PlaceOrderRequest
from .order_calculation_service import OrderCalculationService

logger = logging.getLogger(__name__)


def parse_order_status(value) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Invalid order status: {value}")


class OrderService:
    """Places orders and drives them through their lifecycle"""

    def __init__(self, db: Session, calculator: OrderCalculationService = None):
        self.db = db
        self.store = Store(db)
        self.calculator = calculator or OrderCalculationService()

    def place_order(self, caller: Caller, request: PlaceOrderRequest) -> Order:
        """
        Create a PLACED order from a snapshot of the requested menu items.

        The whole placement is one transaction: if any line fails, no order
        row is written and no menu item order count is incremented.
        """
        if not request.items:
            raise ValidationError("Order must contain at least one item")

        with self.store.in_tx():
            restaurant = self.store.get_active_restaurant(request.restaurant_id)
            if not restaurant:
                raise NotFoundError(f"Restaurant not found: {request.restaurant_id}")

            order_items: List[OrderItem] = []
            priced_lines: List[Tuple] = []
            for line in request.items:
                if line.quantity < 1:
                    raise ValidationError("Quantity must be at least 1")

                menu_item = self.store.get_active_menu_item_for_update(line.menu_item_id)
                if not menu_item:
                    raise NotFoundError(f"Menu item not found: {line.menu_item_id}")
                if menu_item.restaurant_id != restaurant.id:
                    raise ValidationError(
                        f"Menu item {menu_item.id} does not belong to restaurant "
                        f"{restaurant.id}"
                    )
                if not menu_item.is_available:
                    raise ValidationError(f"Menu item not available: {menu_item.name}")

                order_items.append(
                    OrderItem(
                        menu_item_id=menu_item.id,
                        item_name=menu_item.name,
                        item_price=menu_item.price,
                        quantity=line.quantity,
                        subtotal=self.calculator.line_subtotal(
                            menu_item.price, line.quantity
                        ),
                        special_instructions=line.special_instructions,
                    )
                )
                priced_lines.append((menu_item.price, line.quantity))
                self.store.increment_menu_item_order_count(menu_item)

            totals = self.calculator.calculate_order_totals(priced_lines)
            now = datetime.utcnow()
            order = Order(
                customer_id=caller.user_id,
                restaurant_id=restaurant.id,
                status=OrderStatus.PLACED,
                subtotal=totals.subtotal,
                delivery_fee=totals.delivery_fee,
                tax=totals.tax,
                discount=totals.discount,
                total_amount=totals.total_amount,
                delivery_address=request.delivery_address,
                special_instructions=request.special_instructions,
                estimated_delivery_time=now + timedelta(
                    minutes=restaurant.average_delivery_time
                ),
                ordered_at=now,
                updated_at=now,
                items=order_items,
            )
            self.store.add(order)

        self.store.refresh(order)
        logger.info(
            f"Order {order.id} placed by customer {caller.user_id} at restaurant "
            f"{order.restaurant_id}: total={order.total_amount}"
        )
        return order

    def get_order(self, caller: Caller, order_id: int) -> Order:
        order = self.store.get_order(order_id)
        if not order:
            raise NotFoundError(f"Order not found: {order_id}")
        if not can_view_order(caller, order):
            raise PermissionError("You do not have access to this order")
        return order

    def get_my_orders(self, caller: Caller, offset: int, limit: int):
        return self.store.list_customer_orders(caller.user_id, offset, limit)

    def get_restaurant_orders(
        self, caller: Caller, restaurant_id: int, offset: int, limit: int
    ):
        restaurant = self.store.get_restaurant(restaurant_id)
        if not restaurant:
            raise NotFoundError(f"Restaurant not found: {restaurant_id}")
        if not can_manage_restaurant(caller, restaurant):
            raise PermissionError("You do not manage this restaurant")
        return self.store.list_restaurant_orders(restaurant_id, offset, limit)

    def update_order_status(self, caller: Caller, order_id: int, new_status) -> Order:
        new_status = parse_order_status(new_status)

        with self.store.in_tx():
            order = self.store.get_order_for_update(order_id)
            if not order:
                raise NotFoundError(f"Order not found: {order_id}")

            self._check_status_permission(caller, order, new_status)

            current_status = OrderStatus(order.status)
            if current_status in TERMINAL_STATUSES or not is_valid_transition(
                current_status, new_status
            ):
                raise ValidationError(
                    f"Invalid status transition from {current_status.value} to "
                    f"{new_status.value}"
                )

            if new_status in PARTNER_TARGET_STATUSES and order.delivery_partner_id is None:
                raise ValidationError(
                    f"Order {order.id} has no delivery partner assigned"
                )

            now = datetime.utcnow()
            self._sync_active_delivery(order, new_status, now)
            apply_status(order, new_status, now)

        self.store.refresh(order)
        logger.info(
            f"Order {order.id} status changed from {current_status.value} to "
            f"{new_status.value} by {caller.role.value} {caller.user_id}"
        )
        return order

    def cancel_order(self, caller: Caller, order_id: int) -> Order:
        with self.store.in_tx():
            order = self.store.get_order_for_update(order_id)
            if not order:
                raise NotFoundError(f"Order not found: {order_id}")
            if not can_act_for_customer(caller, order):
                raise PermissionError("You can only cancel your own orders")

            current_status = OrderStatus(order.status)
            if current_status not in CANCELLABLE_STATUSES:
                raise ValidationError(
                    f"Order cannot be cancelled in status {current_status.value}"
                )

            now = datetime.utcnow()
            self._sync_active_delivery(order, OrderStatus.CANCELLED, now)
            apply_status(order, OrderStatus.CANCELLED, now)

        self.store.refresh(order)
        logger.info(f"Order {order.id} cancelled by {caller.role.value} {caller.user_id}")
        return order

    def _check_status_permission(
        self, caller: Caller, order: Order, new_status: OrderStatus
    ):
        if is_admin(caller):
            return
        if caller.role == UserRole.RESTAURANT_OWNER:
            restaurant = self.store.get_restaurant(order.restaurant_id)
            if owns_restaurant(caller, restaurant):
                return
            raise PermissionError("You do not own this order's restaurant")
        if caller.role == UserRole.DELIVERY_PARTNER:
            if new_status not in PARTNER_TARGET_STATUSES:
                raise PermissionError(
                    "Delivery partners may only mark orders out for delivery or delivered"
                )
            if not is_assigned_partner(caller, order):
                raise PermissionError("You are not assigned to this order")
            return
        raise PermissionError("You cannot change the status of this order")

    def _sync_active_delivery(self, order: Order, new_status: OrderStatus, now: datetime):
        """Keep the order's open delivery in step with a direct status change."""
        delivery = self.store.get_active_delivery_for_order(order.id)
        if delivery is None:
            return

        if new_status == OrderStatus.CANCELLED:
            delivery.status = DeliveryStatus.CANCELLED
            return

        if new_status in (OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED):
            if delivery.status == DeliveryStatus.ASSIGNED:
                delivery.status = DeliveryStatus.PICKED_UP
                delivery.picked_up_at = now
        if new_status == OrderStatus.DELIVERED:
            delivery.status = DeliveryStatus.DELIVERED
            delivery.delivered_at = now


def apply_status(order: Order, new_status: OrderStatus, now: datetime):
    """Write a validated status onto an order row the caller has locked."""
    order.status = new_status
    order.updated_at = now
    if new_status == OrderStatus.DELIVERED:
        order.actual_delivery_time = now
