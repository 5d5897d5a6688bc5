"""Per-user watchlist of listings, suppliers and crops."""

from __future__ import annotations

import logging
from typing import List

from farm_market.core.exceptions import ValidationException
from farm_market.core.storage import KeyValueStore
from farm_market.modules.utils.records import new_record_id, newest_first

from .models import WatchlistItem
from .repository import WatchlistRepository
from .schemas import WatchlistCreate

logger = logging.getLogger(__name__)


class WatchlistService:
    def __init__(self, store: KeyValueStore):
        self.items = WatchlistRepository(store)

    async def list_items(self, user_id: str) -> List[WatchlistItem]:
        return newest_first(await self.items.list_for_user(user_id))

    async def add_item(self, user_id: str, payload: WatchlistCreate) -> WatchlistItem:
        if payload.type is None:
            raise ValidationException("Watchlist type required", field="type")
        item = WatchlistItem(
            id=new_record_id(),
            user_id=user_id,
            type=payload.type,
            item_id=payload.item_id,
            crop=payload.crop,
            mandi=payload.mandi,
            target_price=payload.target_price,
        )
        await self.items.save(item)
        logger.info("User %s is watching %s %s", user_id, item.type, item.item_id or item.crop)
        return item

    async def remove_item(self, user_id: str, item_id: str) -> None:
        """Idempotent: removing an absent item is not an error."""
        removed = await self.items.remove(user_id, item_id)
        if not removed:
            logger.debug("Watchlist item %s already absent for %s", item_id, user_id)
