from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.records import CamelModel

from .models import MandiRate


class MandiRateFilters(CamelModel):
    crop: Optional[str] = None
    mandi: Optional[str] = None
    date: Optional[str] = None


class MandiRateListResponse(CamelModel):
    rates: List[MandiRate]


class SeedResponse(CamelModel):
    success: bool = True
    count: int
