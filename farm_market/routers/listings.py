"""Listing browse/search and supplier-owned listing CRUD."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import Caller, get_current_caller
from farm_market.modules.listings import ListingService
from farm_market.modules.listings.schemas import (
    ListingCreate,
    ListingFilters,
    ListingListResponse,
    ListingResponse,
    ListingUpdate,
)
from farm_market.modules.utils.records import SuccessResponse

router = APIRouter(prefix="/listings", tags=["Listings"])
suppliers_router = APIRouter(prefix="/suppliers", tags=["Listings"])


def get_listing_service(store: KeyValueStore = Depends(get_store)) -> ListingService:
    """Provide a ListingService instance via FastAPI dependency injection."""
    return ListingService(store)


@router.get("", response_model=ListingListResponse)
async def list_listings(
    crop: Optional[str] = None,
    mandi: Optional[str] = None,
    grade: Optional[str] = None,
    status: str = Query("published"),
    service: ListingService = Depends(get_listing_service),
):
    """Search listings; `status=all` or `<filter>=all` disables that filter."""
    filters = ListingFilters(crop=crop, mandi=mandi, grade=grade, status=status)
    return ListingListResponse(listings=await service.list_listings(filters))


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: str, service: ListingService = Depends(get_listing_service)
):
    return ListingResponse(listing=await service.get_listing(listing_id))


@router.post("", response_model=ListingResponse)
async def create_listing(
    payload: ListingCreate,
    service: ListingService = Depends(get_listing_service),
    caller: Caller = Depends(get_current_caller),
):
    listing = await service.create_listing(caller, payload)
    return ListingResponse(listing=listing)


@router.put("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: str,
    patch: ListingUpdate,
    service: ListingService = Depends(get_listing_service),
    caller: Caller = Depends(get_current_caller),
):
    """Owner-only partial update."""
    listing = await service.update_listing(caller, listing_id, patch)
    return ListingResponse(listing=listing)


@router.delete("/{listing_id}", response_model=SuccessResponse)
async def delete_listing(
    listing_id: str,
    service: ListingService = Depends(get_listing_service),
    caller: Caller = Depends(get_current_caller),
):
    await service.delete_listing(caller, listing_id)
    return SuccessResponse()


@suppliers_router.get("/{supplier_id}/listings", response_model=ListingListResponse)
async def list_supplier_listings(
    supplier_id: str, service: ListingService = Depends(get_listing_service)
):
    """Every listing of one supplier, any status."""
    return ListingListResponse(listings=await service.list_by_supplier(supplier_id))
