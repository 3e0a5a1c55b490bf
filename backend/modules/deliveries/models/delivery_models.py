from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer
from datetime import datetime

from backend.core.database import Base
from ..enums.delivery_enums import DeliveryStatus


class Delivery(Base):
    __tablename__ = "deliveries"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"),
                      nullable=False, index=True)
    delivery_partner_id = Column(Integer, nullable=False, index=True)
    status = Column(
        Enum(DeliveryStatus, name="deliverystatus", native_enum=False, length=32),
        nullable=False,
        default=DeliveryStatus.ASSIGNED,
    )
    assigned_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    picked_up_at = Column(DateTime, nullable=True)
    delivered_at = Column(DateTime, nullable=True)
