"""Public mandi reference rates."""

from typing import Optional

from fastapi import APIRouter, Depends

from farm_market.core.storage import KeyValueStore, get_store
from farm_market.modules.mandi_rates import MandiRateService
from farm_market.modules.mandi_rates.schemas import (
    MandiRateFilters,
    MandiRateListResponse,
)

router = APIRouter(prefix="/mandi-rates", tags=["Mandi Rates"])


def get_mandi_rate_service(
    store: KeyValueStore = Depends(get_store),
) -> MandiRateService:
    return MandiRateService(store)


@router.get("", response_model=MandiRateListResponse)
async def list_mandi_rates(
    crop: Optional[str] = None,
    mandi: Optional[str] = None,
    date: Optional[str] = None,
    service: MandiRateService = Depends(get_mandi_rate_service),
):
    filters = MandiRateFilters(crop=crop, mandi=mandi, date=date)
    return MandiRateListResponse(rates=await service.list_rates(filters))
