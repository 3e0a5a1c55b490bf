from sqlalchemy import (Column, Integer, String, ForeignKey, DateTime,
                        Numeric, Text, Enum)
from sqlalchemy.orm import relationship
from datetime import datetime

from backend.core.database import Base
from ..enums.order_enums import OrderStatus


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"),
                           nullable=False, index=True)
    status = Column(
        Enum(OrderStatus, name="orderstatus", native_enum=False, length=32),
        nullable=False,
        default=OrderStatus.PLACED,
        index=True
    )

    subtotal = Column(Numeric(10, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False)

    delivery_address = Column(String(500), nullable=False)
    special_instructions = Column(String(500), nullable=True)
    delivery_partner_id = Column(Integer, nullable=True, index=True)

    estimated_delivery_time = Column(DateTime, nullable=True)
    actual_delivery_time = Column(DateTime, nullable=True)
    ordered_at = Column(DateTime, nullable=False, default=datetime.utcnow,
                        index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow,
                        onupdate=datetime.utcnow)

    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.id",
        lazy="selectin",
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"),
                      nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"),
                          nullable=False)
    # Snapshot of the menu item at placement time
    item_name = Column(String(200), nullable=False)
    item_price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    special_instructions = Column(Text, nullable=True)

    order = relationship("Order", back_populates="items")
