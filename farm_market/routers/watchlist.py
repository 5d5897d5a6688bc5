from fastapi import APIRouter, Depends

from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import Identity, get_current_identity
from farm_market.modules.utils.records import SuccessResponse
from farm_market.modules.watchlist import WatchlistService
from farm_market.modules.watchlist.schemas import (
    WatchlistCreate,
    WatchlistItemResponse,
    WatchlistResponse,
)

router = APIRouter(prefix="/watchlist", tags=["Watchlist"])


def get_watchlist_service(store: KeyValueStore = Depends(get_store)) -> WatchlistService:
    return WatchlistService(store)


@router.get("", response_model=WatchlistResponse)
async def list_watchlist(
    service: WatchlistService = Depends(get_watchlist_service),
    identity: Identity = Depends(get_current_identity),
):
    return WatchlistResponse(items=await service.list_items(identity.id))


@router.post("", response_model=WatchlistItemResponse)
async def add_to_watchlist(
    payload: WatchlistCreate,
    service: WatchlistService = Depends(get_watchlist_service),
    identity: Identity = Depends(get_current_identity),
):
    return WatchlistItemResponse(item=await service.add_item(identity.id, payload))


@router.delete("/{item_id}", response_model=SuccessResponse)
async def remove_from_watchlist(
    item_id: str,
    service: WatchlistService = Depends(get_watchlist_service),
    identity: Identity = Depends(get_current_identity),
):
    await service.remove_item(identity.id, item_id)
    return SuccessResponse()
