"""
Ownership predicates used by the order, delivery, payment and review services.

Each predicate is a pure function of the caller and the entity; services
decide which error to raise when one fails.
"""

from .auth import Caller, UserRole


def is_admin(caller: Caller) -> bool:
    return caller.role == UserRole.ADMIN


def is_order_customer(caller: Caller, order) -> bool:
    return caller.role == UserRole.CUSTOMER and order.customer_id == caller.user_id


def owns_restaurant(caller: Caller, restaurant) -> bool:
    return (
        caller.role == UserRole.RESTAURANT_OWNER
        and restaurant is not None
        and restaurant.owner_id == caller.user_id
    )


def is_assigned_partner(caller: Caller, assignment) -> bool:
    """True when the caller is the delivery partner on an order or delivery."""
    return (
        caller.role == UserRole.DELIVERY_PARTNER
        and assignment.delivery_partner_id is not None
        and assignment.delivery_partner_id == caller.user_id
    )


def can_view_order(caller: Caller, order) -> bool:
    return is_admin(caller) or order.customer_id == caller.user_id


def can_manage_restaurant(caller: Caller, restaurant) -> bool:
    return is_admin(caller) or owns_restaurant(caller, restaurant)


def can_act_for_customer(caller: Caller, order) -> bool:
    return is_admin(caller) or is_order_customer(caller, order)
