"""Request/response schemas for orders."""

from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.records import CamelModel, PatchModel

from .models import Order, OrderStatus


class OrderCreate(CamelModel):
    listing_id: Optional[str] = None
    quantity: Optional[int] = None
    message: Optional[str] = None


class OrderUpdate(PatchModel):
    """Parties may move the status along or amend the message."""

    status: Optional[OrderStatus] = None
    message: Optional[str] = None


class OrderResponse(CamelModel):
    order: Order


class OrderListResponse(CamelModel):
    orders: List[Order]
