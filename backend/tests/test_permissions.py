from types import SimpleNamespace

from backend.core.auth import Caller, UserRole
from backend.core.permissions import (
    can_act_for_customer,
    can_manage_restaurant,
    can_view_order,
    is_assigned_partner,
    owns_restaurant,
)

ADMIN = Caller(user_id=1, role=UserRole.ADMIN)
CUSTOMER = Caller(user_id=10, role=UserRole.CUSTOMER)
OWNER = Caller(user_id=20, role=UserRole.RESTAURANT_OWNER)
PARTNER = Caller(user_id=30, role=UserRole.DELIVERY_PARTNER)

ORDER = SimpleNamespace(customer_id=10, delivery_partner_id=30)
RESTAURANT = SimpleNamespace(owner_id=20)


class TestPermissions:

    def test_order_visibility(self):
        assert can_view_order(ADMIN, ORDER)
        assert can_view_order(CUSTOMER, ORDER)
        assert not can_view_order(OWNER, ORDER)

    def test_restaurant_management(self):
        assert can_manage_restaurant(ADMIN, RESTAURANT)
        assert can_manage_restaurant(OWNER, RESTAURANT)
        assert not can_manage_restaurant(Caller(user_id=21, role=UserRole.RESTAURANT_OWNER), RESTAURANT)
        assert not owns_restaurant(OWNER, None)

    def test_partner_assignment(self):
        assert is_assigned_partner(PARTNER, ORDER)
        assert not is_assigned_partner(PARTNER, SimpleNamespace(delivery_partner_id=None))
        # Matching id under a different role does not count
        assert not is_assigned_partner(Caller(user_id=30, role=UserRole.CUSTOMER), ORDER)

    def test_acting_for_customer(self):
        assert can_act_for_customer(CUSTOMER, ORDER)
        assert can_act_for_customer(ADMIN, ORDER)
        assert not can_act_for_customer(Caller(user_id=11, role=UserRole.CUSTOMER), ORDER)
