"""Review record stored under `review:<revieweeId>:<id>`."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from farm_market.modules.utils.records import CamelModel, utcnow

MIN_RATING = 1
MAX_RATING = 5


class Review(CamelModel):
    id: str
    order_id: str
    reviewer_id: str
    reviewer_name: str = ""
    reviewee_id: str
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    comment: str = ""
    created_at: datetime = Field(default_factory=utcnow)
