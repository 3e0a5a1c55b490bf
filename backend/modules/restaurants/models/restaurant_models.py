# backend/modules/restaurants/models/restaurant_models.py

from sqlalchemy import (Boolean, Column, Float, ForeignKey, Integer, Numeric,
                        String)

from backend.core.database import Base
from backend.core.mixins import TimestampMixin


class Restaurant(Base, TimestampMixin):
    """Only the columns the ordering core reads or writes.

    ``rating`` and ``total_reviews`` are derived from the review rows and
    rewritten by the rating aggregator after every accepted review.
    """

    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    average_delivery_time = Column(Integer, nullable=False, default=30)

    rating = Column(Float, nullable=False, default=0.0)
    total_reviews = Column(Integer, nullable=False, default=0)


class MenuItem(Base, TimestampMixin):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"),
                           nullable=False, index=True)
    name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    is_available = Column(Boolean, nullable=False, default=True)
    # One increment per order line, regardless of quantity
    order_count = Column(Integer, nullable=False, default=0)
