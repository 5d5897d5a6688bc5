"""Data-access helpers for watchlists; every key lives under the owner's prefix."""

from __future__ import annotations

from typing import List

from farm_market.modules.utils.repository import RecordRepository

from .models import WatchlistItem


class WatchlistRepository(RecordRepository[WatchlistItem]):
    prefix = "watchlist"
    model = WatchlistItem

    async def list_for_user(self, user_id: str) -> List[WatchlistItem]:
        return await self.scan(user_id)

    async def save(self, item: WatchlistItem) -> WatchlistItem:
        return await self.put(item, item.user_id, item.id)

    async def remove(self, user_id: str, item_id: str) -> bool:
        return await self.delete(user_id, item_id)
