"""
Transactional store for the ordering core.

All SQL the order, delivery, payment and review services need lives here,
one method per query, so the services only express business rules. Writes
happen inside ``Store.in_tx()``; the ``*_for_update`` readers take row locks
and must be called inside it.
"""

from contextlib import contextmanager
from typing import List, Optional, Tuple
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .exceptions import ConflictError
from backend.modules.deliveries.enums.delivery_enums import ACTIVE_DELIVERY_STATUSES
from backend.modules.deliveries.models.delivery_models import Delivery
from backend.modules.feedback.models.feedback_models import Review
from backend.modules.orders.models.order_models import Order, OrderItem
from backend.modules.payments.models.payment_models import Payment
from backend.modules.restaurants.models.restaurant_models import MenuItem, Restaurant

logger = logging.getLogger(__name__)


class Store:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def in_tx(self):
        """Run a critical section; commit on success, roll back on any error."""
        try:
            yield self
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Constraint violation, transaction rolled back: {e.orig}")
            raise ConflictError("Resource conflicts with existing data") from e
        except Exception:
            self.db.rollback()
            raise

    def add(self, entity):
        self.db.add(entity)
        return entity

    def flush(self):
        self.db.flush()

    def refresh(self, entity):
        self.db.refresh(entity)
        return entity

    # Restaurants and menu items

    def get_restaurant(self, restaurant_id: int) -> Optional[Restaurant]:
        return self.db.get(Restaurant, restaurant_id)

    def get_active_restaurant(self, restaurant_id: int) -> Optional[Restaurant]:
        return (
            self.db.query(Restaurant)
            .filter(Restaurant.id == restaurant_id, Restaurant.is_active.is_(True))
            .first()
        )

    def get_restaurant_for_update(self, restaurant_id: int) -> Optional[Restaurant]:
        return (
            self.db.query(Restaurant)
            .filter(Restaurant.id == restaurant_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_active_menu_item_for_update(self, menu_item_id: int) -> Optional[MenuItem]:
        return (
            self.db.query(MenuItem)
            .filter(MenuItem.id == menu_item_id, MenuItem.is_active.is_(True))
            .with_for_update()
            .populate_existing()
            .first()
        )

    def increment_menu_item_order_count(self, menu_item: MenuItem):
        # Flushed right away so a second line for the same item sees it
        menu_item.order_count = MenuItem.order_count + 1
        self.db.flush()

    # Orders

    def get_order(self, order_id: int) -> Optional[Order]:
        return self.db.get(Order, order_id)

    def get_order_for_update(self, order_id: int) -> Optional[Order]:
        return (
            self.db.query(Order)
            .filter(Order.id == order_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def list_customer_orders(
        self, customer_id: int, offset: int, limit: int
    ) -> Tuple[List[Order], int]:
        query = self.db.query(Order).filter(Order.customer_id == customer_id)
        return self._page(query.order_by(Order.ordered_at.desc(), Order.id.desc()),
                          query, offset, limit)

    def list_restaurant_orders(
        self, restaurant_id: int, offset: int, limit: int
    ) -> Tuple[List[Order], int]:
        query = self.db.query(Order).filter(Order.restaurant_id == restaurant_id)
        return self._page(query.order_by(Order.ordered_at.desc(), Order.id.desc()),
                          query, offset, limit)

    def delete_order_cascade(self, order_id: int) -> int:
        """Delete an order and its items together. Orders are never deleted
        through the API; this exists for data maintenance only."""
        self.db.query(OrderItem).filter(OrderItem.order_id == order_id).delete(
            synchronize_session=False
        )
        return self.db.query(Order).filter(Order.id == order_id).delete(
            synchronize_session=False
        )

    # Deliveries

    def get_delivery(self, delivery_id: int) -> Optional[Delivery]:
        return self.db.get(Delivery, delivery_id)

    def get_delivery_for_update(self, delivery_id: int) -> Optional[Delivery]:
        return (
            self.db.query(Delivery)
            .filter(Delivery.id == delivery_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_active_delivery_for_order(self, order_id: int) -> Optional[Delivery]:
        return (
            self.db.query(Delivery)
            .filter(
                Delivery.order_id == order_id,
                Delivery.status.in_(list(ACTIVE_DELIVERY_STATUSES)),
            )
            .with_for_update()
            .populate_existing()
            .first()
        )

    def list_partner_deliveries(self, partner_id: int) -> List[Delivery]:
        return (
            self.db.query(Delivery)
            .filter(Delivery.delivery_partner_id == partner_id)
            .order_by(Delivery.assigned_at.desc(), Delivery.id.desc())
            .all()
        )

    # Payments

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        return self.db.get(Payment, payment_id)

    def get_payment_for_update(self, payment_id: int) -> Optional[Payment]:
        return (
            self.db.query(Payment)
            .filter(Payment.id == payment_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_payment_by_order(self, order_id: int) -> Optional[Payment]:
        return self.db.query(Payment).filter(Payment.order_id == order_id).first()

    # Reviews

    def get_review_by_order(self, order_id: int) -> Optional[Review]:
        return self.db.query(Review).filter(Review.order_id == order_id).first()

    def list_restaurant_reviews(
        self, restaurant_id: int, offset: int, limit: int
    ) -> Tuple[List[Review], int]:
        query = self.db.query(Review).filter(Review.restaurant_id == restaurant_id)
        return self._page(query.order_by(Review.created_at.desc(), Review.id.desc()),
                          query, offset, limit)

    def review_aggregate(self, restaurant_id: int) -> Tuple[float, int]:
        """Mean rating and count over every stored review of a restaurant."""
        average, count = (
            self.db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.restaurant_id == restaurant_id)
            .one()
        )
        return float(average or 0.0), int(count or 0)

    def _page(self, ordered_query, base_query, offset: int, limit: int):
        total = base_query.count()
        items = ordered_query.offset(offset).limit(limit).all()
        return items, total
