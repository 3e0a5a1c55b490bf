from decimal import Decimal

import pytest

from backend.core.exceptions import ConflictError
from backend.core.store import Store
from backend.modules.orders.models.order_models import Order, OrderItem
from backend.modules.payments.models.payment_models import (
    Payment,
    PaymentMethod,
    PaymentStatus,
)
from backend.tests.factories import MenuItemFactory, OrderFactory, PaymentFactory


class TestStoreTransactions:

    def test_in_tx_commits(self, db_session):
        order = OrderFactory()
        store = Store(db_session)

        with store.in_tx():
            store.get_order_for_update(order.id).delivery_address = "New address"

        db_session.expire_all()
        assert store.get_order(order.id).delivery_address == "New address"

    def test_in_tx_rolls_back_on_error(self, db_session):
        order = OrderFactory(delivery_address="Old address")
        store = Store(db_session)

        with pytest.raises(RuntimeError):
            with store.in_tx():
                store.get_order_for_update(order.id).delivery_address = "New address"
                raise RuntimeError("abort")

        assert store.get_order(order.id).delivery_address == "Old address"

    def test_unique_violation_becomes_conflict(self, db_session):
        payment = PaymentFactory()
        store = Store(db_session)

        with pytest.raises(ConflictError):
            with store.in_tx():
                store.add(
                    Payment(
                        order_id=payment.order_id,
                        amount=Decimal("1.00"),
                        payment_method=PaymentMethod.UPI,
                        status=PaymentStatus.PENDING,
                    )
                )

        assert db_session.query(Payment).count() == 1


class TestStoreQueries:

    def test_delete_order_cascade(self, db_session):
        order = OrderFactory()
        item = MenuItemFactory()
        db_session.add(
            OrderItem(
                order_id=order.id,
                menu_item_id=item.id,
                item_name=item.name,
                item_price=item.price,
                quantity=1,
                subtotal=item.price,
            )
        )
        db_session.commit()
        store = Store(db_session)

        with store.in_tx():
            deleted = store.delete_order_cascade(order.id)

        assert deleted == 1
        assert db_session.query(Order).count() == 0
        assert db_session.query(OrderItem).count() == 0

    def test_review_aggregate_without_reviews(self, db_session):
        order = OrderFactory()
        assert Store(db_session).review_aggregate(order.restaurant_id) == (0.0, 0)
