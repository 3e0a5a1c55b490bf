# backend/modules/restaurants/models/__init__.py

from .restaurant_models import MenuItem, Restaurant

__all__ = ["Restaurant", "MenuItem"]
