"""Data-access helpers for disputes."""

from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.repository import RecordRepository

from .models import Dispute


class DisputeRepository(RecordRepository[Dispute]):
    prefix = "dispute"
    model = Dispute

    async def get_dispute(self, dispute_id: str) -> Optional[Dispute]:
        return await self.get(dispute_id)

    async def save(self, dispute: Dispute) -> Dispute:
        return await self.put(dispute, dispute.id)

    async def list_all(self) -> List[Dispute]:
        return await self.scan()
