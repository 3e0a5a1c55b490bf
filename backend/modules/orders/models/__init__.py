# backend/modules/orders/models/__init__.py

from .order_models import Order, OrderItem

__all__ = ["Order", "OrderItem"]
