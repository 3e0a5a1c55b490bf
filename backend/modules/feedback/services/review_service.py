# backend/modules/feedback/services/review_service.py

from sqlalchemy.orm import Session
from typing import List, Tuple
import logging

from backend.core.auth import Caller
from backend.core.exceptions import ValidationError, NotFoundError
from backend.core.store import Store
from backend.modules.orders.enums.order_enums import OrderStatus
from backend.modules.feedback.models.feedback_models import Review
from backend.modules.feedback.schemas.feedback_schemas import ReviewCreate
from backend.modules.feedback.services.aggregation_service import ReviewAggregationService

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for submitting and listing restaurant reviews"""

    def __init__(self, db: Session):
        self.db = db
        self.store = Store(db)
        self.aggregation = ReviewAggregationService(db)

    def submit_review(self, caller: Caller, review_data: ReviewCreate) -> Review:
        """Create a review for a delivered order and refresh the restaurant rating"""

        if not 1 <= review_data.rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")

        with self.store.in_tx():
            order = self.store.get_order(review_data.order_id)
            if not order:
                raise NotFoundError(f"Order not found: {review_data.order_id}")

            self._validate_review_eligibility(caller, order)

            review = self.store.add(
                Review(
                    restaurant_id=order.restaurant_id,
                    customer_id=caller.user_id,
                    order_id=order.id,
                    rating=review_data.rating,
                    comment=review_data.comment,
                )
            )
            self.store.flush()
            result = self.aggregation.apply_restaurant_aggregate(order.restaurant_id)

        self.store.refresh(review)
        logger.info(
            f"Created review {review.id} for order {review.order_id}; restaurant "
            f"{result.restaurant_id} now {result.average_rating:.2f} "
            f"({result.total_reviews} reviews)"
        )
        return review

    def get_restaurant_reviews(
        self, restaurant_id: int, offset: int, limit: int
    ) -> Tuple[List[Review], int]:
        return self.store.list_restaurant_reviews(restaurant_id, offset, limit)

    def _validate_review_eligibility(self, caller: Caller, order):
        if order.customer_id != caller.user_id:
            raise ValidationError("You can only review your own orders")
        if order.status != OrderStatus.DELIVERED:
            raise ValidationError("You can only review delivered orders")
        if self.store.get_review_by_order(order.id):
            raise ValidationError("You have already reviewed this order")
