from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.records import CamelModel

from .models import WatchlistItem, WatchlistType


class WatchlistCreate(CamelModel):
    type: Optional[WatchlistType] = None
    item_id: Optional[str] = None
    crop: Optional[str] = None
    mandi: Optional[str] = None
    target_price: Optional[float] = None


class WatchlistItemResponse(CamelModel):
    item: WatchlistItem


class WatchlistResponse(CamelModel):
    items: List[WatchlistItem]
