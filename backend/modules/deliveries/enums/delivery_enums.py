from enum import Enum


class DeliveryStatus(str, Enum):
    ASSIGNED = "ASSIGNED"
    PICKED_UP = "PICKED_UP"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# A delivery in one of these states still owns its order
ACTIVE_DELIVERY_STATUSES = frozenset(
    {DeliveryStatus.ASSIGNED, DeliveryStatus.PICKED_UP}
)
