# backend/modules/payments/schemas/payment_schemas.py

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal
from datetime import datetime
from ..models.payment_models import PaymentStatus, PaymentMethod


class PaymentCreate(BaseModel):
    """Schema for creating a payment"""
    order_id: int
    payment_method: str = Field(..., description="One of the supported payment methods")
    transaction_id: Optional[str] = Field(
        None, max_length=255, description="Gateway transaction already completed by the client"
    )


class PaymentResponse(BaseModel):
    """Basic payment response"""
    id: int
    order_id: int
    amount: Decimal
    payment_method: PaymentMethod
    status: PaymentStatus
    transaction_id: Optional[str] = None
    payment_details: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GatewayOrderResponse(BaseModel):
    """Gateway order handed to the client to start checkout"""
    id: str
    amount: int = Field(..., description="Amount in the smallest currency unit")
    currency: str
    status: str
    key_id: str
    created_at: int = Field(..., description="Epoch seconds")


class GatewayPublicConfig(BaseModel):
    key_id: str
    currency: str
    test_mode: bool
