"""Watchlist item stored under `watchlist:<userId>:<id>`."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from farm_market.modules.utils.records import CamelModel, utcnow


class WatchlistType(str, Enum):
    LISTING = "listing"
    SUPPLIER = "supplier"
    CROP = "crop"


class WatchlistItem(CamelModel):
    id: str
    user_id: str
    type: WatchlistType
    item_id: Optional[str] = None
    crop: Optional[str] = None
    mandi: Optional[str] = None
    target_price: Optional[float] = None
    created_at: datetime = Field(default_factory=utcnow)
