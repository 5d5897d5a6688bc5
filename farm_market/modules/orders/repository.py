"""Data-access helpers for orders."""

from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.repository import RecordRepository

from .models import Order


class OrderRepository(RecordRepository[Order]):
    prefix = "order"
    model = Order

    async def get_order(self, order_id: str) -> Optional[Order]:
        return await self.get(order_id)

    async def save(self, order: Order) -> Order:
        return await self.put(order, order.id)

    async def list_all(self) -> List[Order]:
        return await self.scan()
