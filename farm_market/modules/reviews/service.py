"""Reviews and the reviewee's aggregate rating."""

from __future__ import annotations

import logging
from typing import List

from farm_market.core.exceptions import ValidationException
from farm_market.core.storage import KeyValueStore
from farm_market.modules.users.repository import UserRepository
from farm_market.modules.utils.records import new_record_id, newest_first

from .models import MAX_RATING, MIN_RATING, Review
from .repository import ReviewRepository
from .schemas import ReviewCreate

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, store: KeyValueStore):
        self.reviews = ReviewRepository(store)
        self.users = UserRepository(store)

    async def list_for_user(self, user_id: str) -> List[Review]:
        return newest_first(await self.reviews.list_for_user(user_id))

    async def create_review(self, caller, payload: ReviewCreate) -> Review:
        if not payload.order_id or not payload.reviewee_id or not payload.rating:
            raise ValidationException("Order ID, reviewee, and rating required")
        rating = int(payload.rating)
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationException(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}", field="rating"
            )

        review = Review(
            id=new_record_id(),
            order_id=payload.order_id,
            reviewer_id=caller.id,
            reviewer_name=caller.display_name,
            reviewee_id=payload.reviewee_id,
            rating=rating,
            comment=payload.comment or "",
        )
        await self.reviews.save(review)
        logger.info("User %s reviewed %s (%d)", caller.id, review.reviewee_id, rating)

        await self.recompute_rating(review.reviewee_id)
        return review

    async def recompute_rating(self, user_id: str) -> None:
        """Set the user's rating to the mean of every review targeting them.

        Read-mean-write is not atomic: concurrent submissions may drop one update, which
        the next submission repairs.
        """
        profile = await self.users.get_user(user_id)
        if profile is None:
            return
        reviews = await self.reviews.list_for_user(user_id)
        if not reviews:
            return
        average = sum(r.rating for r in reviews) / len(reviews)
        await self.users.save(profile.model_copy(update={"rating": average}))
