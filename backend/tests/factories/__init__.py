# backend/tests/factories/__init__.py

"""
Shared test factories for the backend.

These factories provide reusable test data generation for all modules.
"""

from .base import BaseFactory, bind_session
from .restaurant import RestaurantFactory, MenuItemFactory
from .order import OrderFactory
from .delivery import DeliveryFactory
from .payment import PaymentFactory
from .review import ReviewFactory

__all__ = [
    'BaseFactory',
    'bind_session',
    'RestaurantFactory',
    'MenuItemFactory',
    'OrderFactory',
    'DeliveryFactory',
    'PaymentFactory',
    'ReviewFactory',
]
