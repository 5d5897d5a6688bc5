"""Data-access helpers for reviews, scoped by the reviewed user."""

from __future__ import annotations

from typing import List

from farm_market.modules.utils.repository import RecordRepository

from .models import Review


class ReviewRepository(RecordRepository[Review]):
    prefix = "review"
    model = Review

    async def save(self, review: Review) -> Review:
        return await self.put(review, review.reviewee_id, review.id)

    async def list_for_user(self, reviewee_id: str) -> List[Review]:
        return await self.scan(reviewee_id)
