# backend/modules/feedback/services/aggregation_service.py

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from backend.core.exceptions import NotFoundError
from backend.core.store import Store

logger = logging.getLogger(__name__)


@dataclass
class AggregationResult:
    """Result of review aggregation calculation"""
    restaurant_id: int
    total_reviews: int
    average_rating: float
    last_updated: datetime


class ReviewAggregationService:
    """Keeps a restaurant's rating and review count equal to the mean and
    count of its stored reviews.

    The aggregate is always recomputed from the review rows, never adjusted
    incrementally, so re-running it repairs any half-applied update.
    """

    def __init__(self, db: Session):
        self.db = db
        self.store = Store(db)

    def apply_restaurant_aggregate(self, restaurant_id: int) -> AggregationResult:
        """Recompute inside the caller's transaction; does not commit."""
        restaurant = self.store.get_restaurant_for_update(restaurant_id)
        if not restaurant:
            raise NotFoundError(f"Restaurant not found: {restaurant_id}")

        self.store.flush()
        average_rating, total_reviews = self.store.review_aggregate(restaurant_id)
        restaurant.rating = average_rating
        restaurant.total_reviews = total_reviews

        return AggregationResult(
            restaurant_id=restaurant_id,
            total_reviews=total_reviews,
            average_rating=average_rating,
            last_updated=datetime.utcnow(),
        )

    def recompute_restaurant_rating(self, restaurant_id: int) -> AggregationResult:
        """Standalone recompute for recovery and maintenance jobs."""
        with self.store.in_tx():
            result = self.apply_restaurant_aggregate(restaurant_id)
        logger.info(
            f"Recomputed rating for restaurant {restaurant_id}: "
            f"{result.average_rating:.2f} over {result.total_reviews} reviews"
        )
        return result
