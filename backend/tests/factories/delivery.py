# backend/tests/factories/delivery.py

from datetime import datetime

from factory import LazyFunction, SelfAttribute, Sequence, SubFactory

from .base import BaseFactory
from .order import OrderFactory
from backend.modules.deliveries.enums.delivery_enums import DeliveryStatus
from backend.modules.deliveries.models.delivery_models import Delivery


class DeliveryFactory(BaseFactory):
    """Factory for creating deliveries."""

    class Meta:
        model = Delivery
        exclude = ("order",)

    order = SubFactory(OrderFactory)
    order_id = SelfAttribute("order.id")
    delivery_partner_id = Sequence(lambda n: 3000 + n)
    status = DeliveryStatus.ASSIGNED
    assigned_at = LazyFunction(datetime.utcnow)
