"""Listing browse/search and supplier-owned CRUD."""

from __future__ import annotations

import logging
from typing import List

from farm_market.core.exceptions import (
    OwnershipRequiredException,
    ResourceNotFoundException,
    ValidationException,
)
from farm_market.core.storage import KeyValueStore
from farm_market.modules.utils.records import merge_patch, new_record_id, utcnow

from .models import Listing
from .repository import ListingRepository
from .schemas import ListingCreate, ListingFilters, ListingUpdate

logger = logging.getLogger(__name__)

# A filter value of "all" disables that filter.
ALL = "all"


def _active(value) -> bool:
    return bool(value) and value != ALL


def apply_filters(listings: List[Listing], filters: ListingFilters) -> List[Listing]:
    """Status equality (unless "all"), crop/grade equality, mandi substring containment."""
    result = [
        listing
        for listing in listings
        if filters.status == ALL or listing.status == filters.status
    ]
    if _active(filters.crop):
        result = [listing for listing in result if listing.crop == filters.crop]
    if _active(filters.mandi):
        result = [listing for listing in result if filters.mandi in listing.mandi]
    if _active(filters.grade):
        result = [listing for listing in result if listing.grade == filters.grade]
    return result


class ListingService:
    def __init__(self, store: KeyValueStore):
        self.listings = ListingRepository(store)

    async def list_listings(self, filters: ListingFilters) -> List[Listing]:
        return apply_filters(await self.listings.list_all(), filters)

    async def list_all(self) -> List[Listing]:
        return await self.listings.list_all()

    async def list_by_supplier(self, supplier_id: str) -> List[Listing]:
        return [
            listing
            for listing in await self.listings.list_all()
            if listing.supplier_id == supplier_id
        ]

    async def get_listing(self, listing_id: str) -> Listing:
        listing = await self.listings.get_listing(listing_id)
        if listing is None:
            raise ResourceNotFoundException("Listing", listing_id)
        return listing

    async def create_listing(self, caller, payload: ListingCreate) -> Listing:
        crop = (payload.crop or "").strip()
        mandi = (payload.mandi or "").strip()
        if not crop or not payload.quantity or not payload.price_per_unit or not mandi:
            raise ValidationException("Required fields missing")
        if payload.quantity < 0 or payload.price_per_unit < 0:
            raise ValidationException("Quantity and price must be positive")

        profile = caller.profile
        listing = Listing(
            id=new_record_id(),
            supplier_id=caller.id,
            supplier_name=caller.display_name,
            supplier_rating=profile.rating if profile else 0.0,
            supplier_verified=profile.verified if profile else False,
            supplier_location=(profile.location if profile else None) or "",
            crop=crop,
            grade=payload.grade or "Standard",
            quantity=payload.quantity,
            unit=payload.unit or "kg",
            price_per_unit=payload.price_per_unit,
            mandi=mandi,
            packaging=payload.packaging or "",
            harvest_date=payload.harvest_date or utcnow(),
            images=payload.images,
            certification=payload.certification or "",
            description=payload.description or "",
        )
        await self.listings.save(listing)
        logger.info("Supplier %s published listing %s (%s)", caller.id, listing.id, crop)
        return listing

    async def _owned_listing(self, caller, listing_id: str) -> Listing:
        listing = await self.get_listing(listing_id)
        if listing.supplier_id != caller.id:
            logger.warning("User %s denied access to listing %s", caller.id, listing_id)
            raise OwnershipRequiredException("listing")
        return listing

    async def update_listing(self, caller, listing_id: str, patch: ListingUpdate) -> Listing:
        listing = await self._owned_listing(caller, listing_id)
        updated = merge_patch(listing, patch)
        await self.listings.save(updated)
        return updated

    async def delete_listing(self, caller, listing_id: str) -> None:
        await self._owned_listing(caller, listing_id)
        await self.listings.remove(listing_id)
        logger.info("Supplier %s deleted listing %s", caller.id, listing_id)
