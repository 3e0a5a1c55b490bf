from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from ..enums.delivery_enums import DeliveryStatus


class DeliveryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    delivery_partner_id: int
    status: DeliveryStatus
    assigned_at: datetime
    picked_up_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
