# backend/modules/deliveries/services/delivery_service.py

from datetime import datetime
from typing import List
import logging

from sqlalchemy.orm import Session

from backend.core.auth import Caller
from backend.core.exceptions import NotFoundError, PermissionError, ValidationError
from backend.core.permissions import can_manage_restaurant, is_admin, is_assigned_partner
from backend.core.store import Store
from backend.modules.orders.enums.order_enums import TERMINAL_STATUSES, OrderStatus
from backend.modules.orders.services.order_service import apply_status
from ..enums.delivery_enums import DeliveryStatus
from ..models.delivery_models import Delivery

logger = logging.getLogger(__name__)


class DeliveryService:
    """Binds orders to delivery partners and records pickup and drop-off.

    The delivery row and its order are always changed in the same
    transaction, with the order row locked first.
    """

    def __init__(self, db: Session):
        self.db = db
        self.store = Store(db)

    def assign_delivery(self, caller: Caller, order_id: int, partner_id: int) -> Delivery:
        with self.store.in_tx():
            order = self.store.get_order_for_update(order_id)
            if not order:
                raise NotFoundError(f"Order not found: {order_id}")

            restaurant = self.store.get_restaurant(order.restaurant_id)
            if not can_manage_restaurant(caller, restaurant):
                raise PermissionError("You do not manage this order's restaurant")

            if OrderStatus(order.status) in TERMINAL_STATUSES:
                raise ValidationError(
                    f"Cannot assign a delivery to an order in status {order.status.value}"
                )
            if self.store.get_active_delivery_for_order(order.id):
                raise ValidationError(f"Order {order.id} already has an active delivery")

            delivery = Delivery(
                order_id=order.id,
                delivery_partner_id=partner_id,
                status=DeliveryStatus.ASSIGNED,
                assigned_at=datetime.utcnow(),
            )
            self.store.add(delivery)
            order.delivery_partner_id = partner_id
            order.updated_at = datetime.utcnow()

        self.store.refresh(delivery)
        logger.info(
            f"Delivery {delivery.id} assigned: order {order_id} -> partner {partner_id}"
        )
        return delivery

    def mark_picked_up(self, caller: Caller, delivery_id: int) -> Delivery:
        with self.store.in_tx():
            delivery, order = self._lock_partner_delivery(caller, delivery_id)
            if delivery.status != DeliveryStatus.ASSIGNED:
                raise ValidationError(
                    f"Delivery cannot be picked up in status {delivery.status.value}"
                )

            current_status = OrderStatus(order.status)
            if current_status not in (
                OrderStatus.READY_FOR_PICKUP, OrderStatus.OUT_FOR_DELIVERY
            ):
                raise ValidationError(
                    f"Order {order.id} is not ready for pickup (status "
                    f"{current_status.value})"
                )

            now = datetime.utcnow()
            delivery.status = DeliveryStatus.PICKED_UP
            delivery.picked_up_at = now
            if current_status == OrderStatus.READY_FOR_PICKUP:
                apply_status(order, OrderStatus.OUT_FOR_DELIVERY, now)

        self.store.refresh(delivery)
        logger.info(f"Delivery {delivery.id} picked up by partner {caller.user_id}")
        return delivery

    def mark_delivered(self, caller: Caller, delivery_id: int) -> Delivery:
        with self.store.in_tx():
            delivery, order = self._lock_partner_delivery(caller, delivery_id)
            if delivery.status != DeliveryStatus.PICKED_UP:
                raise ValidationError(
                    f"Delivery cannot be delivered in status {delivery.status.value}"
                )

            if OrderStatus(order.status) != OrderStatus.OUT_FOR_DELIVERY:
                raise ValidationError(
                    f"Order {order.id} is not out for delivery (status "
                    f"{order.status.value})"
                )

            now = datetime.utcnow()
            delivery.status = DeliveryStatus.DELIVERED
            delivery.delivered_at = now
            apply_status(order, OrderStatus.DELIVERED, now)

        self.store.refresh(delivery)
        logger.info(f"Delivery {delivery.id} delivered by partner {caller.user_id}")
        return delivery

    def get_partner_deliveries(self, caller: Caller, partner_id: int) -> List[Delivery]:
        if not is_admin(caller) and caller.user_id != partner_id:
            raise PermissionError("You can only view your own deliveries")
        return self.store.list_partner_deliveries(partner_id)

    def _lock_partner_delivery(self, caller: Caller, delivery_id: int):
        """Lock the order, then the delivery, after checking the caller."""
        delivery = self.store.get_delivery(delivery_id)
        if not delivery:
            raise NotFoundError(f"Delivery not found: {delivery_id}")
        if not is_assigned_partner(caller, delivery):
            raise PermissionError("You are not assigned to this delivery")

        order = self.store.get_order_for_update(delivery.order_id)
        delivery = self.store.get_delivery_for_update(delivery_id)
        return delivery, order
