# backend/modules/feedback/schemas/feedback_schemas.py

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime

from backend.core.pagination import PaginatedResponse


class ReviewCreate(BaseModel):
    """Schema for creating a review"""

    order_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)


class ReviewResponse(BaseModel):
    """Schema for review response"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    restaurant_id: int
    customer_id: int
    order_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime


class ReviewListResponse(PaginatedResponse[ReviewResponse]):
    """Paginated list of reviews"""
    pass
