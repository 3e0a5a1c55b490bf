from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from backend.core.pagination import PaginatedResponse
from ..enums.order_enums import OrderStatus


class OrderItemRequest(BaseModel):
    menu_item_id: int
    quantity: int = Field(..., ge=1)
    special_instructions: Optional[str] = Field(None, max_length=500)


class PlaceOrderRequest(BaseModel):
    restaurant_id: int
    items: List[OrderItemRequest] = Field(..., min_length=1)
    delivery_address: str = Field(..., min_length=1, max_length=500)
    special_instructions: Optional[str] = Field(None, max_length=500)


class OrderItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: int
    item_name: str
    item_price: Decimal
    quantity: int
    subtotal: Decimal
    special_instructions: Optional[str] = None


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    restaurant_id: int
    status: OrderStatus
    items: List[OrderItemOut] = []
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    discount: Decimal
    total_amount: Decimal
    delivery_address: str
    special_instructions: Optional[str] = None
    delivery_partner_id: Optional[int] = None
    estimated_delivery_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None
    ordered_at: datetime
    updated_at: datetime


class OrderPage(PaginatedResponse[OrderOut]):
    pass
