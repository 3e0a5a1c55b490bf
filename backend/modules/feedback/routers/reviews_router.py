# backend/modules/feedback/routers/reviews_router.py

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
import logging

from backend.core.auth import Caller, UserRole, require_roles
from backend.core.database import get_db
from backend.core.pagination import PageParams, page_params
from backend.modules.feedback.services.review_service import ReviewService
from backend.modules.feedback.schemas.feedback_schemas import (
    ReviewCreate,
    ReviewResponse,
    ReviewListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def submit_review(
    review_data: ReviewCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_roles([UserRole.CUSTOMER])),
):
    """Review a delivered order"""
    return ReviewService(db).submit_review(caller, review_data)


@router.get("/restaurant/{restaurant_id}", response_model=ReviewListResponse)
def get_restaurant_reviews(
    restaurant_id: int = Path(..., description="Restaurant ID"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    """List a restaurant's reviews, newest first"""
    items, total = ReviewService(db).get_restaurant_reviews(
        restaurant_id, params.offset, params.size
    )
    return ReviewListResponse.build(items, total, params)
