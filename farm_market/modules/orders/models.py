"""Order record stored under `order:<id>` and its status state machine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet

from pydantic import Field

from farm_market.modules.utils.records import CamelModel, utcnow


class OrderStatus(str, Enum):
    INQUIRY = "inquiry"
    NEGOTIATION = "negotiation"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


ORDER_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    OrderStatus.INQUIRY.value: frozenset(
        {OrderStatus.NEGOTIATION.value, OrderStatus.CONFIRMED.value, OrderStatus.CANCELLED.value}
    ),
    OrderStatus.NEGOTIATION.value: frozenset(
        {OrderStatus.CONFIRMED.value, OrderStatus.CANCELLED.value}
    ),
    OrderStatus.CONFIRMED.value: frozenset(
        {OrderStatus.SHIPPED.value, OrderStatus.CANCELLED.value}
    ),
    OrderStatus.SHIPPED.value: frozenset(
        {OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value}
    ),
    OrderStatus.DELIVERED.value: frozenset(),
    OrderStatus.CANCELLED.value: frozenset(),
}


def can_transition(current: str, requested: str) -> bool:
    """Re-asserting the current status is always allowed."""
    if current == requested:
        return True
    return requested in ORDER_TRANSITIONS.get(current, frozenset())


class Order(CamelModel):
    id: str
    listing_id: str
    buyer_id: str
    buyer_name: str = ""
    supplier_id: str
    crop: str
    quantity: int
    unit: str = "kg"
    unit_price: float
    # Fixed at creation from the listing price; never recomputed.
    total_amount: float
    status: OrderStatus = OrderStatus.INQUIRY
    message: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def is_party(self, user_id: str) -> bool:
        return user_id in (self.buyer_id, self.supplier_id)

    def counterparty(self, user_id: str) -> str:
        return self.supplier_id if user_id == self.buyer_id else self.buyer_id
