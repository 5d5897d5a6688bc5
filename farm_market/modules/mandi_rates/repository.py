"""Data-access helpers for mandi rates."""

from __future__ import annotations

from typing import List

from farm_market.modules.utils.repository import RecordRepository

from .models import MandiRate


class MandiRateRepository(RecordRepository[MandiRate]):
    prefix = "mandi-rate"
    model = MandiRate

    async def save(self, rate: MandiRate) -> MandiRate:
        return await self.put(rate, rate.id)

    async def list_all(self) -> List[MandiRate]:
        return await self.scan()
