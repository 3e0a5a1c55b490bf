# backend/modules/deliveries/models/__init__.py

from .delivery_models import Delivery

__all__ = ["Delivery"]
