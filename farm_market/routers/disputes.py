"""Order disputes: any party raises, admins decide."""

from fastapi import APIRouter, Depends

from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import Caller, get_current_caller, require_admin
from farm_market.modules.disputes import DisputeService
from farm_market.modules.disputes.schemas import (
    DisputeCreate,
    DisputeListResponse,
    DisputeResponse,
    DisputeUpdate,
)

router = APIRouter(prefix="/disputes", tags=["Disputes"])


def get_dispute_service(store: KeyValueStore = Depends(get_store)) -> DisputeService:
    return DisputeService(store)


@router.post("", response_model=DisputeResponse)
async def create_dispute(
    payload: DisputeCreate,
    service: DisputeService = Depends(get_dispute_service),
    caller: Caller = Depends(get_current_caller),
):
    return DisputeResponse(dispute=await service.create_dispute(caller, payload))


@router.get("", response_model=DisputeListResponse)
async def list_disputes(
    service: DisputeService = Depends(get_dispute_service),
    caller: Caller = Depends(get_current_caller),
):
    """Admins see all disputes, other callers only their own."""
    return DisputeListResponse(disputes=await service.list_disputes(caller))


@router.patch("/{dispute_id}", response_model=DisputeResponse)
async def update_dispute(
    dispute_id: str,
    patch: DisputeUpdate,
    service: DisputeService = Depends(get_dispute_service),
    admin: Caller = Depends(require_admin),
):
    dispute = await service.update_dispute(admin, dispute_id, patch)
    return DisputeResponse(dispute=dispute)
