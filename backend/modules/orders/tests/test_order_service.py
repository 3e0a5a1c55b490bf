from decimal import Decimal

import pytest

from backend.core.auth import Caller, UserRole
from backend.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from backend.modules.deliveries.enums.delivery_enums import DeliveryStatus
from backend.modules.orders.enums.order_enums import OrderStatus
from backend.modules.orders.models.order_models import Order, OrderItem
from backend.modules.orders.schemas.order_schemas import (
    OrderItemRequest,
    PlaceOrderRequest,
)
from backend.modules.orders.services.order_service import OrderService
from backend.tests.factories import (
    DeliveryFactory,
    MenuItemFactory,
    OrderFactory,
    RestaurantFactory,
)


def customer(user_id=42):
    return Caller(user_id=user_id, role=UserRole.CUSTOMER)


def owner_of(restaurant):
    return Caller(user_id=restaurant.owner_id, role=UserRole.RESTAURANT_OWNER)


def partner(user_id):
    return Caller(user_id=user_id, role=UserRole.DELIVERY_PARTNER)


class TestPlaceOrder:

    @pytest.fixture
    def menu(self, db_session):
        restaurant = RestaurantFactory()
        curry = MenuItemFactory(restaurant=restaurant, name="Curry", price=Decimal("150.00"))
        naan = MenuItemFactory(restaurant=restaurant, name="Naan", price=Decimal("100.00"))
        return restaurant, curry, naan

    def test_place_order_computes_totals(self, db_session, menu):
        """Two curries and a naan come to 470.00 with fee and tax"""
        restaurant, curry, naan = menu
        request = PlaceOrderRequest(
            restaurant_id=restaurant.id,
            items=[
                OrderItemRequest(menu_item_id=curry.id, quantity=2),
                OrderItemRequest(menu_item_id=naan.id, quantity=1),
            ],
            delivery_address="12 MG Road",
        )

        order = OrderService(db_session).place_order(customer(), request)

        assert order.id is not None
        assert order.status == OrderStatus.PLACED
        assert order.customer_id == 42
        assert order.subtotal == Decimal("400.00")
        assert order.tax == Decimal("20.00")
        assert order.delivery_fee == Decimal("50.00")
        assert order.total_amount == Decimal("470.00")
        assert order.estimated_delivery_time is not None
        assert [item.item_name for item in order.items] == ["Curry", "Naan"]
        assert order.items[0].subtotal == Decimal("300.00")

        db_session.refresh(curry)
        db_session.refresh(naan)
        assert curry.order_count == 1
        assert naan.order_count == 1

    def test_single_line_happy_path(self, db_session):
        restaurant = RestaurantFactory(average_delivery_time=30)
        thali = MenuItemFactory(restaurant=restaurant, price=Decimal("200.00"))
        request = PlaceOrderRequest(
            restaurant_id=restaurant.id,
            items=[OrderItemRequest(menu_item_id=thali.id, quantity=2)],
            delivery_address="A",
        )

        order = OrderService(db_session).place_order(customer(5), request)

        assert (order.subtotal, order.tax, order.delivery_fee, order.total_amount) == (
            Decimal("400.00"), Decimal("20.00"), Decimal("50.00"), Decimal("470.00")
        )
        delta = order.estimated_delivery_time - order.ordered_at
        assert delta.total_seconds() == pytest.approx(30 * 60, abs=1)
        db_session.refresh(thali)
        assert thali.order_count == 1

    @pytest.mark.parametrize("minutes", [0, 45])
    def test_estimate_uses_restaurant_delivery_time(self, db_session, minutes):
        restaurant = RestaurantFactory(average_delivery_time=minutes)
        dosa = MenuItemFactory(restaurant=restaurant, price=Decimal("80.00"))
        request = PlaceOrderRequest(
            restaurant_id=restaurant.id,
            items=[OrderItemRequest(menu_item_id=dosa.id, quantity=1)],
            delivery_address="B",
        )

        order = OrderService(db_session).place_order(customer(5), request)

        delta = order.estimated_delivery_time - order.ordered_at
        assert delta.total_seconds() == pytest.approx(minutes * 60, abs=1)

    def test_order_items_keep_price_snapshot(self, db_session, menu):
        """Changing the menu price later does not touch placed orders"""
        restaurant, curry, _ = menu
        request = PlaceOrderRequest(
            restaurant_id=restaurant.id,
            items=[OrderItemRequest(menu_item_id=curry.id, quantity=1)],
            delivery_address="12 MG Road",
        )
        order = OrderService(db_session).place_order(customer(), request)

        curry.price = Decimal("999.00")
        db_session.commit()
        db_session.refresh(order)

        assert order.items[0].item_price == Decimal("150.00")

    def test_repeated_item_counts_once_per_line(self, db_session, menu):
        restaurant, curry, _ = menu
        request = PlaceOrderRequest(
            restaurant_id=restaurant.id,
            items=[
                OrderItemRequest(menu_item_id=curry.id, quantity=3),
                OrderItemRequest(menu_item_id=curry.id, quantity=1),
            ],
            delivery_address="12 MG Road",
        )

        OrderService(db_session).place_order(customer(), request)

        db_session.refresh(curry)
        assert curry.order_count == 2

    def test_unavailable_item_rolls_back_everything(self, db_session, menu):
        """A failing line leaves no order and no order count increments"""
        restaurant, curry, naan = menu
        naan.is_available = False
        db_session.commit()

        request = PlaceOrderRequest(
            restaurant_id=restaurant.id,
            items=[
                OrderItemRequest(menu_item_id=curry.id, quantity=1),
                OrderItemRequest(menu_item_id=naan.id, quantity=1),
            ],
            delivery_address="12 MG Road",
        )

        with pytest.raises(ValidationError) as exc_info:
            OrderService(db_session).place_order(customer(), request)

        assert "Menu item not available" in str(exc_info.value)
        assert db_session.query(Order).count() == 0
        assert db_session.query(OrderItem).count() == 0
        db_session.refresh(curry)
        assert curry.order_count == 0

    def test_unknown_menu_item(self, db_session, menu):
        restaurant, _, _ = menu
        request = PlaceOrderRequest(
            restaurant_id=restaurant.id,
            items=[OrderItemRequest(menu_item_id=9999, quantity=1)],
            delivery_address="12 MG Road",
        )

        with pytest.raises(NotFoundError):
            OrderService(db_session).place_order(customer(), request)

    def test_inactive_restaurant_is_not_found(self, db_session, menu):
        restaurant, curry, _ = menu
        restaurant.is_active = False
        db_session.commit()
        request = PlaceOrderRequest(
            restaurant_id=restaurant.id,
            items=[OrderItemRequest(menu_item_id=curry.id, quantity=1)],
            delivery_address="12 MG Road",
        )

        with pytest.raises(NotFoundError) as exc_info:
            OrderService(db_session).place_order(customer(), request)
        assert "Restaurant not found" in str(exc_info.value)

    def test_menu_item_from_another_restaurant(self, db_session, menu):
        restaurant, _, _ = menu
        foreign_item = MenuItemFactory()
        request = PlaceOrderRequest(
            restaurant_id=restaurant.id,
            items=[OrderItemRequest(menu_item_id=foreign_item.id, quantity=1)],
            delivery_address="12 MG Road",
        )

        with pytest.raises(ValidationError):
            OrderService(db_session).place_order(customer(), request)
        assert db_session.query(Order).count() == 0


class TestOrderStatus:

    @pytest.fixture
    def restaurant(self, db_session):
        return RestaurantFactory()

    def test_owner_confirms_order(self, db_session, restaurant):
        order = OrderFactory(restaurant=restaurant)

        updated = OrderService(db_session).update_order_status(
            owner_of(restaurant), order.id, "confirmed"
        )

        assert updated.status == OrderStatus.CONFIRMED

    def test_skipping_a_step_is_rejected(self, db_session, restaurant):
        order = OrderFactory(restaurant=restaurant)

        with pytest.raises(ValidationError) as exc_info:
            OrderService(db_session).update_order_status(
                owner_of(restaurant), order.id, OrderStatus.PREPARING
            )

        assert "Invalid status transition from PLACED to PREPARING" in str(exc_info.value)
        db_session.refresh(order)
        assert order.status == OrderStatus.PLACED

    @pytest.mark.parametrize("terminal", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_terminal_orders_never_change(self, db_session, restaurant, admin, terminal):
        order = OrderFactory(restaurant=restaurant, status=terminal)

        with pytest.raises(ValidationError):
            OrderService(db_session).update_order_status(
                admin, order.id, OrderStatus.CANCELLED
            )

        db_session.refresh(order)
        assert order.status == terminal

    def test_unknown_status_value(self, db_session, restaurant, admin):
        order = OrderFactory(restaurant=restaurant)

        with pytest.raises(ValidationError) as exc_info:
            OrderService(db_session).update_order_status(admin, order.id, "SHIPPED")
        assert "Invalid order status" in str(exc_info.value)

    def test_owner_of_other_restaurant_is_forbidden(self, db_session, restaurant):
        order = OrderFactory(restaurant=restaurant)
        other_owner = owner_of(RestaurantFactory())

        with pytest.raises(ForbiddenError):
            OrderService(db_session).update_order_status(
                other_owner, order.id, OrderStatus.CONFIRMED
            )

    def test_out_for_delivery_requires_partner(self, db_session, restaurant):
        order = OrderFactory(restaurant=restaurant, status=OrderStatus.READY_FOR_PICKUP)

        with pytest.raises(ValidationError):
            OrderService(db_session).update_order_status(
                owner_of(restaurant), order.id, OrderStatus.OUT_FOR_DELIVERY
            )

    def test_assigned_partner_drives_delivery_statuses(self, db_session, restaurant):
        order = OrderFactory(
            restaurant=restaurant,
            status=OrderStatus.READY_FOR_PICKUP,
            delivery_partner_id=77,
        )
        service = OrderService(db_session)

        service.update_order_status(partner(77), order.id, OrderStatus.OUT_FOR_DELIVERY)
        delivered = service.update_order_status(partner(77), order.id, OrderStatus.DELIVERED)

        assert delivered.status == OrderStatus.DELIVERED
        assert delivered.actual_delivery_time is not None

    def test_partner_cannot_drive_kitchen_statuses(self, db_session, restaurant):
        order = OrderFactory(restaurant=restaurant, delivery_partner_id=77)

        with pytest.raises(ForbiddenError):
            OrderService(db_session).update_order_status(
                partner(77), order.id, OrderStatus.CONFIRMED
            )

    def test_unassigned_partner_is_forbidden(self, db_session, restaurant):
        order = OrderFactory(
            restaurant=restaurant,
            status=OrderStatus.READY_FOR_PICKUP,
            delivery_partner_id=77,
        )

        with pytest.raises(ForbiddenError):
            OrderService(db_session).update_order_status(
                partner(78), order.id, OrderStatus.OUT_FOR_DELIVERY
            )

    def test_customer_cannot_change_status(self, db_session, restaurant):
        order = OrderFactory(restaurant=restaurant)

        with pytest.raises(ForbiddenError):
            OrderService(db_session).update_order_status(
                customer(order.customer_id), order.id, OrderStatus.CONFIRMED
            )

    def test_missing_order(self, db_session, admin):
        with pytest.raises(NotFoundError):
            OrderService(db_session).update_order_status(admin, 404, OrderStatus.CONFIRMED)

    def test_delivered_status_closes_active_delivery(self, db_session, restaurant, admin):
        order = OrderFactory(
            restaurant=restaurant,
            status=OrderStatus.OUT_FOR_DELIVERY,
            delivery_partner_id=77,
        )
        delivery = DeliveryFactory(order=order, delivery_partner_id=77)

        OrderService(db_session).update_order_status(admin, order.id, OrderStatus.DELIVERED)

        db_session.refresh(delivery)
        assert delivery.status == DeliveryStatus.DELIVERED
        assert delivery.picked_up_at is not None
        assert delivery.delivered_at is not None


class TestCancelOrder:

    def test_customer_cancels_placed_order(self, db_session):
        order = OrderFactory()

        cancelled = OrderService(db_session).cancel_order(
            customer(order.customer_id), order.id
        )

        assert cancelled.status == OrderStatus.CANCELLED

    def test_cancel_confirmed_order_cancels_its_delivery(self, db_session):
        order = OrderFactory(status=OrderStatus.CONFIRMED, delivery_partner_id=77)
        delivery = DeliveryFactory(order=order, delivery_partner_id=77)

        OrderService(db_session).cancel_order(customer(order.customer_id), order.id)

        db_session.refresh(delivery)
        assert delivery.status == DeliveryStatus.CANCELLED

    def test_cannot_cancel_once_preparing(self, db_session):
        order = OrderFactory(status=OrderStatus.PREPARING)

        with pytest.raises(ValidationError) as exc_info:
            OrderService(db_session).cancel_order(customer(order.customer_id), order.id)

        assert "Order cannot be cancelled in status PREPARING" in str(exc_info.value)
        db_session.refresh(order)
        assert order.status == OrderStatus.PREPARING

    def test_other_customer_cannot_cancel(self, db_session):
        order = OrderFactory()

        with pytest.raises(ForbiddenError):
            OrderService(db_session).cancel_order(
                customer(order.customer_id + 1), order.id
            )

    def test_admin_can_cancel(self, db_session, admin):
        order = OrderFactory(status=OrderStatus.CONFIRMED)

        assert OrderService(db_session).cancel_order(admin, order.id).status == (
            OrderStatus.CANCELLED
        )


class TestOrderQueries:

    def test_get_order_for_owner_customer(self, db_session):
        order = OrderFactory()
        assert OrderService(db_session).get_order(customer(order.customer_id), order.id).id == order.id

    def test_get_order_hidden_from_other_customers(self, db_session):
        order = OrderFactory()

        with pytest.raises(ForbiddenError):
            OrderService(db_session).get_order(customer(order.customer_id + 1), order.id)

    def test_get_missing_order(self, db_session, admin):
        with pytest.raises(NotFoundError):
            OrderService(db_session).get_order(admin, 12345)

    def test_my_orders_are_paged_newest_first(self, db_session):
        orders = [OrderFactory(customer_id=9) for _ in range(3)]
        OrderFactory(customer_id=10)

        items, total = OrderService(db_session).get_my_orders(customer(9), 0, 2)

        assert total == 3
        assert [o.id for o in items] == [orders[2].id, orders[1].id]

    def test_restaurant_orders_need_ownership(self, db_session):
        restaurant = RestaurantFactory()
        OrderFactory(restaurant=restaurant)
        service = OrderService(db_session)

        items, total = service.get_restaurant_orders(owner_of(restaurant), restaurant.id, 0, 20)
        assert total == 1

        with pytest.raises(ForbiddenError):
            service.get_restaurant_orders(owner_of(RestaurantFactory()), restaurant.id, 0, 20)
