# backend/modules/feedback/models/feedback_models.py

from sqlalchemy import (CheckConstraint, Column, DateTime, ForeignKey, Integer,
                        String, UniqueConstraint)
from datetime import datetime

from backend.core.database import Base


class Review(Base):
    """Customer review of a delivered order"""
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    customer_id = Column(Integer, nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)

    rating = Column(Integer, nullable=False)  # 1 to 5
    comment = Column(String(1000), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    __table_args__ = (
        UniqueConstraint("order_id", name="uq_reviews_order_id"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )
