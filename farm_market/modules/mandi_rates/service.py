"""Reference mandi rates: public search and admin seeding."""

from __future__ import annotations

import logging
from typing import List

from farm_market.core.storage import KeyValueStore

from .models import MandiRate
from .repository import MandiRateRepository
from .schemas import MandiRateFilters

logger = logging.getLogger(__name__)

SEED_RATES: List[MandiRate] = [
    MandiRate(id="1", crop="Wheat", mandi="Azadpur Mandi", state="Delhi",
              govt_rate=2125, date="2025-10-19", change=2.5),
    MandiRate(id="2", crop="Rice", mandi="Karnal Mandi", state="Haryana",
              govt_rate=2850, date="2025-10-19", change=-1.2),
    MandiRate(id="3", crop="Tomato", mandi="Koyambedu Market", state="Tamil Nadu",
              govt_rate=18, date="2025-10-19", change=15.5),
    MandiRate(id="4", crop="Onion", mandi="Lasalgaon Mandi", state="Maharashtra",
              govt_rate=22, date="2025-10-19", change=-8.3),
    MandiRate(id="5", crop="Potato", mandi="Agra Mandi", state="Uttar Pradesh",
              govt_rate=12, date="2025-10-19", change=0),
]


class MandiRateService:
    def __init__(self, store: KeyValueStore):
        self.rates = MandiRateRepository(store)

    async def list_rates(self, filters: MandiRateFilters) -> List[MandiRate]:
        """Case-insensitive substring match on crop and mandi, exact match on date."""
        rates = await self.rates.list_all()
        if filters.crop:
            needle = filters.crop.lower()
            rates = [rate for rate in rates if needle in rate.crop.lower()]
        if filters.mandi:
            needle = filters.mandi.lower()
            rates = [rate for rate in rates if needle in rate.mandi.lower()]
        if filters.date:
            rates = [rate for rate in rates if rate.date == filters.date]
        return rates

    async def seed(self) -> int:
        """Write the reference rates; re-seeding overwrites the same keys."""
        for rate in SEED_RATES:
            await self.rates.save(rate)
        logger.info("Seeded %d mandi rates", len(SEED_RATES))
        return len(SEED_RATES)
