"""Data-access helpers for listings."""

from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.repository import RecordRepository

from .models import Listing


class ListingRepository(RecordRepository[Listing]):
    prefix = "listing"
    model = Listing

    async def get_listing(self, listing_id: str) -> Optional[Listing]:
        return await self.get(listing_id)

    async def save(self, listing: Listing) -> Listing:
        return await self.put(listing, listing.id)

    async def remove(self, listing_id: str) -> bool:
        return await self.delete(listing_id)

    async def list_all(self) -> List[Listing]:
        return await self.scan()
