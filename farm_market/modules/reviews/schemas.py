from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.records import CamelModel

from .models import Review


class ReviewCreate(CamelModel):
    order_id: Optional[str] = None
    reviewee_id: Optional[str] = None
    # Fractional ratings are truncated to an int.
    rating: Optional[float] = None
    comment: Optional[str] = None


class ReviewResponse(CamelModel):
    review: Review


class ReviewListResponse(CamelModel):
    reviews: List[Review]
