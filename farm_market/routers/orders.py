"""Order inquiries between buyers and suppliers."""

from fastapi import APIRouter, Depends

from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import Caller, get_current_caller
from farm_market.modules.orders import OrderService
from farm_market.modules.orders.schemas import (
    OrderCreate,
    OrderListResponse,
    OrderResponse,
    OrderUpdate,
)

router = APIRouter(prefix="/orders", tags=["Orders"])


def get_order_service(store: KeyValueStore = Depends(get_store)) -> OrderService:
    return OrderService(store)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    service: OrderService = Depends(get_order_service),
    caller: Caller = Depends(get_current_caller),
):
    """Orders where the caller is the buyer or the supplier."""
    return OrderListResponse(orders=await service.list_for_user(caller.id))


@router.post("", response_model=OrderResponse)
async def create_order(
    payload: OrderCreate,
    service: OrderService = Depends(get_order_service),
    caller: Caller = Depends(get_current_caller),
):
    return OrderResponse(order=await service.create_order(caller, payload))


@router.patch("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: str,
    patch: OrderUpdate,
    service: OrderService = Depends(get_order_service),
    caller: Caller = Depends(get_current_caller),
):
    """Status/message update by either party."""
    return OrderResponse(order=await service.update_order(caller, order_id, patch))
